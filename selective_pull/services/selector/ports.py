"""Narrow interfaces to the tools the selector drives.

The decision procedure only talks to these protocols. Production adapters
shell out to git, snap and snapcraftctl; tests substitute in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol

from selective_pull.core.result import Result
from selective_pull.services.selector.errors import SelectorError


class VersionControl(Protocol):
    """Read-only view over the repository, plus the one checkout call."""

    def has_identity(self) -> bool:
        """True if the directory is a git checkout with at least one commit."""
        ...

    def is_clean(self) -> Result[bool, SelectorError]:
        """True if neither tracked files nor the index carry changes."""
        ...

    def release_tags(self) -> Result[list[str], SelectorError]:
        """Tags containing a '.' or '_' character."""
        ...

    def describe(self) -> str | None:
        """`git describe --always --dirty --tags` for HEAD, or None."""
        ...

    def checkout(self, ref: str) -> Result[None, SelectorError]:
        ...


class SnapStore(Protocol):
    def stable_version(self, snap_name: str) -> Result[str, SelectorError]:
        """Version published in the stable channel, '' if none."""
        ...


class BuildController(Protocol):
    def pull(self) -> Result[None, SelectorError]:
        ...

    def set_version(self, version: str) -> Result[None, SelectorError]:
        ...
