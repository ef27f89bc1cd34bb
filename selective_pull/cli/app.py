from __future__ import annotations

import sys

import click
import typer
from typer.core import TyperCommand

from selective_pull.cli.context import build_context
from selective_pull.core.errors import ErrorCode
from selective_pull.core.result import Err
from selective_pull.output.console import ConsoleProtocol, RichConsole
from selective_pull.output.errors import print_selector_error, selector_error_exit_code
from selective_pull.services.selector.errors import SelectorError
from selective_pull.services.selector.model import InvocationFlags
from selective_pull.services.selector.service import run_selective_pull

USAGE = "usage: selective-pull [--force-snapshot] [--debug] [--dry-run]"
FLAGS = frozenset({"--force-snapshot", "--debug", "--dry-run"})

_UNKNOWN_ARGS = "selective_pull.unknown_args"

app = typer.Typer(add_completion=False, no_args_is_help=False)


class StrictFlagsCommand(TyperCommand):
    """Command that records every token other than the known flags.

    click drops a bare `--` and would hand later tokens over as arguments;
    here any such token is kept for the command to reject.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.meta[_UNKNOWN_ARGS] = [arg for arg in args if arg not in FLAGS]
        return super().parse_args(ctx, args)


def make_console(*, debug: bool) -> ConsoleProtocol:
    return RichConsole(debug=debug)


def usage_error(message: str) -> SelectorError:
    return SelectorError(kind="usage", message=message, hint=USAGE)


# Unknown tokens are collected and rejected by the command itself so that
# they exit with status 1 like every other failure.
@app.command(
    cls=StrictFlagsCommand,
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
)
def select_and_pull(
    ctx: typer.Context,
    force_snapshot: bool = typer.Option(
        False,
        "--force-snapshot",
        help="Build a snapshot without looking at tags or the store.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Trace commands and decisions to stderr."),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Skip the pull hook and the version report.",
    ),
) -> None:
    """Build the latest tagged release if it is not in stable yet, else a snapshot."""
    console = make_console(debug=debug)
    unknown = ctx.meta.get(_UNKNOWN_ARGS) or ctx.args
    if unknown:
        error = usage_error(f"unknown argument: {unknown[0]}")
        print_selector_error(error, console)
        raise typer.Exit(code=selector_error_exit_code(error))

    flags = InvocationFlags(force_snapshot=force_snapshot, dry_run=dry_run, debug=debug)
    cli_ctx = build_context(console=console)

    result = run_selective_pull(
        flags=flags,
        vcs=cli_ctx.vcs,
        store=cli_ctx.store,
        controller=cli_ctx.controller,
        snap_name=cli_ctx.config.snap_name,
        console=console,
    )
    if isinstance(result, Err):
        print_selector_error(result.error, console)
        raise typer.Exit(code=selector_error_exit_code(result.error))


def main() -> None:
    try:
        code = app(standalone_mode=False)
    except click.ClickException as e:
        # e.g. "--dry-run=yes": rejected by click before the command runs
        error = usage_error(e.format_message())
        print_selector_error(error, make_console(debug=False))
        sys.exit(selector_error_exit_code(error))
    sys.exit(code if isinstance(code, int) else int(ErrorCode.OK))
