from __future__ import annotations

import pytest

from selective_pull.core.result import Err, Ok
from selective_pull.output.console import MockConsole
from selective_pull.services.selector.model import (
    UNKNOWN_VERSION,
    CheckoutDecision,
    CheckoutMode,
    InvocationFlags,
)
from selective_pull.services.selector.service import (
    apply_checkout,
    compute_version,
    run_selective_pull,
)
from selective_pull.test.services.fakes import FakeController, FakeStore, FakeVcs


def _run(
    *,
    vcs: FakeVcs,
    store: FakeStore | None = None,
    controller: FakeController | None = None,
    flags: InvocationFlags | None = None,
    snap_name: str | None = "hello",
    console: MockConsole | None = None,
):
    return run_selective_pull(
        flags=flags or InvocationFlags(),
        vcs=vcs,
        store=store or FakeStore(),
        controller=controller or FakeController(),
        snap_name=snap_name,
        console=console or MockConsole(),
    )


def test_release_run_checks_out_and_reports_tag_version() -> None:
    vcs = FakeVcs(
        tags=["1.0", "1.2", "1.10"],
        described="1.10-4-gdeadbee",
        described_after_checkout={"1.10": "1.10"},
    )
    controller = FakeController()
    console = MockConsole()

    result = _run(vcs=vcs, store=FakeStore(stable="1.2"), controller=controller, console=console)

    assert isinstance(result, Ok)
    assert result.value.decision.mode is CheckoutMode.RELEASE
    assert result.value.version == "1.10"
    assert vcs.checked_out == ["1.10"]
    assert controller.calls == ["pull", "set-version 1.10"]
    assert console.find("version: 1.10")


def test_pull_hook_runs_before_decision() -> None:
    vcs = FakeVcs(tags=["1.0"])
    controller = FakeController(fail="pull")

    result = _run(vcs=vcs, controller=controller)

    assert isinstance(result, Err)
    assert result.error.kind == "controller_failed"
    assert vcs.calls == []


def test_snapshot_run_does_not_check_out() -> None:
    vcs = FakeVcs(clean=False, tags=["1.0"], described="v1.0-2-gabc1234-dirty")
    controller = FakeController()

    result = _run(vcs=vcs, controller=controller)

    assert isinstance(result, Ok)
    assert result.value.version == "1.0-2-gabc1234-dirty"
    assert vcs.checked_out == []
    assert controller.calls == ["pull", "set-version 1.0-2-gabc1234-dirty"]


def test_dry_run_skips_controller_but_still_checks_out() -> None:
    vcs = FakeVcs(tags=["v2.0"], described="v1.9-3-gabc", described_after_checkout={"v2.0": "v2.0"})
    controller = FakeController()
    console = MockConsole()

    result = _run(
        vcs=vcs,
        store=FakeStore(stable="1.9"),
        controller=controller,
        flags=InvocationFlags(dry_run=True),
        console=console,
    )

    assert isinstance(result, Ok)
    assert controller.calls == []
    assert vcs.checked_out == ["v2.0"]
    assert console.find("version: 2.0")


@pytest.mark.parametrize("force_snapshot", [True, False])
def test_dry_run_never_calls_controller(force_snapshot: bool) -> None:
    controller = FakeController()

    _run(
        vcs=FakeVcs(tags=["1.0"]),
        controller=controller,
        flags=InvocationFlags(dry_run=True, force_snapshot=force_snapshot),
    )

    assert controller.calls == []


def test_missing_snap_name_aborts_after_pull() -> None:
    controller = FakeController()
    vcs = FakeVcs(tags=["1.0"])

    result = _run(vcs=vcs, controller=controller, snap_name=None)

    assert isinstance(result, Err)
    assert result.error.kind == "missing_config"
    assert controller.calls == ["pull"]
    assert vcs.checked_out == []


def test_checkout_failure_aborts_before_version_report() -> None:
    controller = FakeController()

    result = _run(
        vcs=FakeVcs(tags=["1.1"], fail="checkout"),
        store=FakeStore(stable="1.0"),
        controller=controller,
    )

    assert isinstance(result, Err)
    assert result.error.kind == "vcs_failed"
    assert controller.calls == ["pull"]


def test_set_version_failure_propagates() -> None:
    result = _run(vcs=FakeVcs(), controller=FakeController(fail="set_version"))

    assert isinstance(result, Err)
    assert result.error.kind == "controller_failed"


def test_compute_version_unknown_without_identity() -> None:
    assert compute_version(FakeVcs(described=None)) == UNKNOWN_VERSION == "unknown"


def test_compute_version_strips_single_v() -> None:
    assert compute_version(FakeVcs(described="v1.2-1-gabc")) == "1.2-1-gabc"
    assert compute_version(FakeVcs(described="abc1234")) == "abc1234"


def test_no_history_reports_unknown() -> None:
    controller = FakeController()

    result = _run(vcs=FakeVcs(identity=False, described=None), controller=controller)

    assert isinstance(result, Ok)
    assert result.value.decision.reason == "no_vcs"
    assert result.value.version == "unknown"
    assert controller.calls == ["pull", "set-version unknown"]


def test_apply_checkout_release_without_tag_is_internal_error() -> None:
    vcs = FakeVcs()
    decision = CheckoutDecision(mode=CheckoutMode.RELEASE, reason="unreleased_tag", tag=None)

    result = apply_checkout(decision, vcs=vcs, console=MockConsole())

    assert isinstance(result, Err)
    assert result.error.kind == "internal"
    assert vcs.checked_out == []


def test_apply_checkout_unknown_mode_is_internal_error() -> None:
    decision = CheckoutDecision(mode="bogus", reason="forced")  # type: ignore[arg-type]

    result = apply_checkout(decision, vcs=FakeVcs(), console=MockConsole())

    assert isinstance(result, Err)
    assert result.error.kind == "internal"


def test_debug_traces_dry_run_skips() -> None:
    console = MockConsole(debug_enabled=True)

    _run(vcs=FakeVcs(), flags=InvocationFlags(dry_run=True, debug=True), console=console)

    assert console.find("skipping pull hook")
    assert console.find("skipping version report")
