from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from selective_pull.core.result import Err, Ok, Result
from selective_pull.git.repository import CommandTrace
from selective_pull.platform.process import run as run_process
from selective_pull.services.selector.errors import SelectorError

CHANNELS_HEADER = "channels:"
STABLE_LABEL = "stable:"


def parse_stable_version(snap_info: str) -> str:
    """Extract the stable channel version from `snap info` output.

    Only the indented entries below the `channels:` header are read, so a
    description mentioning "stable:" is never mistaken for a channel. Takes
    the version of the first `stable:` entry (current snapd prints it as
    `latest/stable:`) and drops any `+build` suffix. Returns '' when no
    stable channel is listed.
    """
    for tokens in _channel_entries(snap_info):
        label, value = tokens[0], tokens[1] if len(tokens) > 1 else ""
        if label == STABLE_LABEL or label.endswith("/" + STABLE_LABEL):
            return value.split("+", 1)[0]
    return ""


def _channel_entries(snap_info: str) -> Iterator[list[str]]:
    in_channels = False
    for line in snap_info.splitlines():
        if not in_channels:
            in_channels = line.rstrip() == CHANNELS_HEADER
            continue
        if not line[:1].isspace():
            # next top-level field, e.g. "installed:"
            return
        tokens = line.split()
        if tokens:
            yield tokens


class SnapInfoStore:
    """`SnapStore` backed by `snap info`."""

    def __init__(
        self,
        *,
        cwd: Path,
        snap_executable: str = "snap",
        trace: CommandTrace | None = None,
    ) -> None:
        self._cwd = cwd
        self._snap = snap_executable
        self._trace = trace

    def stable_version(self, snap_name: str) -> Result[str, SelectorError]:
        cmd = [self._snap, "info", snap_name]
        if self._trace is not None:
            self._trace(cmd)
        result = run_process(cmd, cwd=self._cwd)
        if isinstance(result, Err):
            return Err(
                SelectorError(
                    kind="store_failed",
                    message=f"snap info {snap_name} failed (exit {result.error.returncode})",
                    hint=result.error.stderr.strip() or None,
                )
            )
        return Ok(parse_stable_version(result.value))
