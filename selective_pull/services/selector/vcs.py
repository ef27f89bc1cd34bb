from __future__ import annotations

from selective_pull.core.result import Err, Ok, Result
from selective_pull.git.repository import GitError, Repository
from selective_pull.services.selector.errors import SelectorError
from selective_pull.services.selector.versions import RELEASE_TAG_GLOB, is_release_tag


def _vcs_error(error: GitError) -> SelectorError:
    return SelectorError(
        kind="vcs_failed",
        message=f"git {error.command} failed (exit {error.returncode})",
        hint=error.message,
    )


class GitVersionControl:
    """`VersionControl` backed by a git checkout."""

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    def has_identity(self) -> bool:
        return self._repo.has_commit()

    def is_clean(self) -> Result[bool, SelectorError]:
        return self._repo.is_clean().map_err(_vcs_error)

    def release_tags(self) -> Result[list[str], SelectorError]:
        result = self._repo.tags(RELEASE_TAG_GLOB)
        if isinstance(result, Err):
            return Err(_vcs_error(result.error))
        # The glob already filters; guard against git versions that ignore it.
        return Ok([t for t in result.value if is_release_tag(t)])

    def describe(self) -> str | None:
        return self._repo.describe()

    def checkout(self, ref: str) -> Result[None, SelectorError]:
        return self._repo.checkout(ref).map_err(_vcs_error)
