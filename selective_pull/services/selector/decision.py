"""Checkout-mode decision.

Conditions are checked in a fixed order and the first one that applies
wins; later conditions are never evaluated, so a forced or dirty snapshot
never touches the snap store.

1. forced from the command line         -> snapshot
2. no git history                       -> snapshot
3. uncommitted changes to tracked files -> snapshot
4. no tag containing '.' or '_'         -> snapshot
5. latest tag (sort -V, leading 'v' stripped) equal to the stable
   channel version (build suffix after '+' dropped) -> snapshot,
   otherwise -> release of that tag

Versions are compared as plain strings: "1.2" and "1.2.0" differ.
"""

from __future__ import annotations

from selective_pull.core.config import SNAP_NAME_ENV
from selective_pull.core.result import Err, Ok, Result
from selective_pull.output.console import ConsoleProtocol
from selective_pull.services.selector.errors import SelectorError
from selective_pull.services.selector.model import (
    CheckoutDecision,
    CheckoutMode,
    InvocationFlags,
)
from selective_pull.services.selector.ports import SnapStore, VersionControl
from selective_pull.services.selector.versions import latest_release_tag, strip_v_prefix


def decide_checkout_mode(
    *,
    flags: InvocationFlags,
    vcs: VersionControl,
    store: SnapStore,
    snap_name: str | None,
    console: ConsoleProtocol,
) -> Result[CheckoutDecision, SelectorError]:
    if flags.force_snapshot:
        return Ok(CheckoutDecision.snapshot("forced"))

    if not vcs.has_identity():
        return Ok(CheckoutDecision.snapshot("no_vcs"))

    clean = vcs.is_clean()
    if isinstance(clean, Err):
        return clean
    if not clean.value:
        return Ok(CheckoutDecision.snapshot("dirty"))

    tags = vcs.release_tags()
    if isinstance(tags, Err):
        return tags
    last_release_tag = latest_release_tag(tags.value)
    if last_release_tag is None:
        return Ok(CheckoutDecision.snapshot("no_release_tags"))

    if not snap_name:
        return Err(
            SelectorError(
                kind="missing_config",
                message=f"{SNAP_NAME_ENV} is not set",
                hint="Run selective-pull from an override-pull scriptlet, or export the snap name",
            )
        )

    console.debug(f"release tags: {', '.join(tags.value)}")
    last_release_version = strip_v_prefix(last_release_tag)

    stable = store.stable_version(snap_name)
    if isinstance(stable, Err):
        return stable
    last_stable_release_version = stable.value
    console.debug(
        f"last release: {last_release_version} ({last_release_tag}), "
        f"stable: {last_stable_release_version or '(none)'}"
    )

    if last_release_version == last_stable_release_version:
        return Ok(
            CheckoutDecision(
                mode=CheckoutMode.SNAPSHOT,
                reason="already_stable",
                tag=last_release_tag,
                release_version=last_release_version,
                stable_version=last_stable_release_version,
            )
        )

    return Ok(
        CheckoutDecision(
            mode=CheckoutMode.RELEASE,
            reason="unreleased_tag",
            tag=last_release_tag,
            release_version=last_release_version,
            stable_version=last_stable_release_version,
        )
    )
