from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path

import typer

from selective_pull.core.config import SelectorConfig, load_config
from selective_pull.core.result import Err
from selective_pull.git.repository import CommandTrace, Repository
from selective_pull.output.console import ConsoleProtocol
from selective_pull.output.errors import print_selector_error, selector_error_exit_code
from selective_pull.services.selector.controller import CtlBuildController
from selective_pull.services.selector.errors import SelectorError
from selective_pull.services.selector.ports import BuildController, SnapStore, VersionControl
from selective_pull.services.selector.store import SnapInfoStore
from selective_pull.services.selector.vcs import GitVersionControl


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: SelectorConfig
    console: ConsoleProtocol
    vcs: VersionControl
    store: SnapStore
    controller: BuildController


def _command_tracer(console: ConsoleProtocol) -> CommandTrace:
    def trace(cmd: list[str]) -> None:
        console.debug(f"+ {shlex.join(cmd)}")

    return trace


def build_context(*, console: ConsoleProtocol) -> CLIContext:
    config_result = load_config(os.environ, cwd=Path.cwd())
    if isinstance(config_result, Err):
        error = SelectorError(
            kind="invalid_config",
            message=config_result.error.message,
            hint=config_result.error.hint,
        )
        print_selector_error(error, console)
        raise typer.Exit(code=selector_error_exit_code(error))

    config = config_result.value
    trace = _command_tracer(console)
    console.debug(
        f"source: {config.source_dir}, snap: {config.snap_name or '(unset)'}, "
        f"controller: {config.controller}"
    )

    return CLIContext(
        config=config,
        console=console,
        vcs=GitVersionControl(Repository(config.source_dir, trace=trace)),
        store=SnapInfoStore(cwd=config.source_dir, trace=trace),
        controller=CtlBuildController(
            cwd=config.source_dir,
            flavor=config.controller,
            trace=trace,
        ),
    )
