from __future__ import annotations

from pathlib import Path

from selective_pull.core.config import ControllerFlavor
from selective_pull.core.result import Err, Ok, Result
from selective_pull.git.repository import CommandTrace
from selective_pull.platform.process import run_silent
from selective_pull.services.selector.errors import SelectorError


def pull_command(flavor: ControllerFlavor) -> list[str]:
    match flavor:
        case "snapcraftctl":
            return ["snapcraftctl", "pull"]
        case "craftctl":
            return ["craftctl", "default"]


def set_version_command(flavor: ControllerFlavor, version: str) -> list[str]:
    match flavor:
        case "snapcraftctl":
            return ["snapcraftctl", "set-version", version]
        case "craftctl":
            return ["craftctl", "set", f"version={version}"]


class CtlBuildController:
    """`BuildController` driving snapcraftctl (or craftctl on newer bases).

    Output of the controller is passed through to the build log.
    """

    def __init__(
        self,
        *,
        cwd: Path,
        flavor: ControllerFlavor = "snapcraftctl",
        trace: CommandTrace | None = None,
    ) -> None:
        self._cwd = cwd
        self._flavor = flavor
        self._trace = trace

    def pull(self) -> Result[None, SelectorError]:
        return self._run(pull_command(self._flavor))

    def set_version(self, version: str) -> Result[None, SelectorError]:
        return self._run(set_version_command(self._flavor, version))

    def _run(self, cmd: list[str]) -> Result[None, SelectorError]:
        if self._trace is not None:
            self._trace(cmd)
        result = run_silent(cmd, cwd=self._cwd)
        if isinstance(result, Err):
            return Err(
                SelectorError(
                    kind="controller_failed",
                    message=f"{' '.join(cmd)} failed (exit {result.error.returncode})",
                    hint=result.error.stderr.strip() or None,
                )
            )
        return Ok(None)
