from __future__ import annotations

from selective_pull.core.result import Err, Ok, Result
from selective_pull.output.console import ConsoleProtocol
from selective_pull.services.selector.decision import decide_checkout_mode
from selective_pull.services.selector.errors import SelectorError
from selective_pull.services.selector.model import (
    UNKNOWN_VERSION,
    CheckoutDecision,
    CheckoutMode,
    InvocationFlags,
    SelectionOutcome,
)
from selective_pull.services.selector.ports import BuildController, SnapStore, VersionControl
from selective_pull.services.selector.versions import strip_v_prefix


def apply_checkout(
    decision: CheckoutDecision,
    *,
    vcs: VersionControl,
    console: ConsoleProtocol,
) -> Result[None, SelectorError]:
    match decision.mode:
        case CheckoutMode.SNAPSHOT:
            return Ok(None)
        case CheckoutMode.RELEASE if decision.tag:
            console.info(f"checking out {decision.tag}")
            return vcs.checkout(decision.tag)
        case _:
            return Err(
                SelectorError(
                    kind="internal",
                    message=f"invalid checkout mode: {decision.mode!r} (tag={decision.tag!r})",
                )
            )


def compute_version(vcs: VersionControl) -> str:
    described = vcs.describe()
    if not described:
        return UNKNOWN_VERSION
    return strip_v_prefix(described)


def run_selective_pull(
    *,
    flags: InvocationFlags,
    vcs: VersionControl,
    store: SnapStore,
    controller: BuildController,
    snap_name: str | None,
    console: ConsoleProtocol,
) -> Result[SelectionOutcome, SelectorError]:
    """Pull, pick snapshot or release, check out, and report the version.

    The first failing step ends the run; a checkout that already happened
    is not undone.
    """
    if flags.dry_run:
        console.debug("dry run: skipping pull hook")
    else:
        pulled = controller.pull()
        if isinstance(pulled, Err):
            return pulled

    decided = decide_checkout_mode(
        flags=flags,
        vcs=vcs,
        store=store,
        snap_name=snap_name,
        console=console,
    )
    if isinstance(decided, Err):
        return decided
    decision = decided.value
    console.info(f"checkout mode: {decision.mode} ({decision.describe()})")

    checked_out = apply_checkout(decision, vcs=vcs, console=console)
    if isinstance(checked_out, Err):
        return checked_out

    version = compute_version(vcs)
    console.info(f"version: {version}")

    if flags.dry_run:
        console.debug("dry run: skipping version report")
    else:
        reported = controller.set_version(version)
        if isinstance(reported, Err):
            return reported

    return Ok(SelectionOutcome(decision=decision, version=version))
