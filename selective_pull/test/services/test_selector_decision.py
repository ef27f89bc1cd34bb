from __future__ import annotations

import pytest

from selective_pull.core.result import Err, Ok, Result
from selective_pull.output.console import MockConsole
from selective_pull.services.selector.decision import decide_checkout_mode
from selective_pull.services.selector.errors import SelectorError
from selective_pull.services.selector.model import (
    CheckoutDecision,
    CheckoutMode,
    InvocationFlags,
)
from selective_pull.test.services.fakes import FakeStore, FakeVcs


def _decide(
    *,
    vcs: FakeVcs,
    store: FakeStore | None = None,
    flags: InvocationFlags | None = None,
    snap_name: str | None = "hello",
) -> Result[CheckoutDecision, SelectorError]:
    return decide_checkout_mode(
        flags=flags or InvocationFlags(),
        vcs=vcs,
        store=store or FakeStore(),
        snap_name=snap_name,
        console=MockConsole(debug_enabled=True),
    )


def test_force_snapshot_skips_everything() -> None:
    vcs = FakeVcs(tags=["1.0"])
    store = FakeStore(stable="0.9")

    result = _decide(vcs=vcs, store=store, flags=InvocationFlags(force_snapshot=True))

    assert result == Ok(CheckoutDecision.snapshot("forced"))
    assert vcs.calls == []
    assert store.queried == []


@pytest.mark.parametrize("clean", [True, False])
def test_force_snapshot_regardless_of_state(clean: bool) -> None:
    vcs = FakeVcs(clean=clean, tags=["1.0", "2.0"], identity=True)

    result = _decide(vcs=vcs, flags=InvocationFlags(force_snapshot=True, dry_run=True))

    assert isinstance(result, Ok)
    assert result.value.mode is CheckoutMode.SNAPSHOT


def test_no_vcs_identity_is_snapshot() -> None:
    vcs = FakeVcs(identity=False, tags=["1.0"])

    result = _decide(vcs=vcs)

    assert result == Ok(CheckoutDecision.snapshot("no_vcs"))
    assert vcs.calls == ["has_identity"]


def test_dirty_tree_wins_over_tags() -> None:
    vcs = FakeVcs(clean=False, tags=["1.0", "1.2"])
    store = FakeStore(stable="0.1")

    result = _decide(vcs=vcs, store=store)

    assert result == Ok(CheckoutDecision.snapshot("dirty"))
    assert "release_tags" not in vcs.calls
    assert store.queried == []


def test_no_release_tags_is_snapshot() -> None:
    vcs = FakeVcs(tags=["nightly", "latest"])
    store = FakeStore(stable="1.0")

    result = _decide(vcs=vcs, store=store)

    assert result == Ok(CheckoutDecision.snapshot("no_release_tags"))
    assert store.queried == []


def test_snapshot_paths_do_not_need_snap_name() -> None:
    result = _decide(vcs=FakeVcs(tags=[]), snap_name=None)

    assert isinstance(result, Ok)
    assert result.value.reason == "no_release_tags"


def test_missing_snap_name_is_checked_before_store_lookup() -> None:
    store = FakeStore(stable="1.0")

    result = _decide(vcs=FakeVcs(tags=["1.0"]), store=store, snap_name=None)

    assert isinstance(result, Err)
    assert result.error.kind == "missing_config"
    assert "SNAPCRAFT_PROJECT_NAME" in result.error.message
    assert store.queried == []


def test_unreleased_tag_selects_release_with_version_sort() -> None:
    store = FakeStore(stable="1.2")

    result = _decide(vcs=FakeVcs(tags=["1.0", "1.2", "1.10"]), store=store)

    assert result == Ok(
        CheckoutDecision(
            mode=CheckoutMode.RELEASE,
            reason="unreleased_tag",
            tag="1.10",
            release_version="1.10",
            stable_version="1.2",
        )
    )
    assert store.queried == ["hello"]


def test_latest_tag_already_stable_is_snapshot() -> None:
    result = _decide(vcs=FakeVcs(tags=["1.0", "1.2", "1.10"]), store=FakeStore(stable="1.10"))

    assert isinstance(result, Ok)
    assert result.value.mode is CheckoutMode.SNAPSHOT
    assert result.value.reason == "already_stable"
    assert result.value.tag == "1.10"


def test_leading_v_is_stripped_before_comparison() -> None:
    result = _decide(vcs=FakeVcs(tags=["v2.3.4"]), store=FakeStore(stable="2.3.4"))

    assert isinstance(result, Ok)
    assert result.value.mode is CheckoutMode.SNAPSHOT
    assert result.value.release_version == "2.3.4"


def test_release_keeps_original_tag_name() -> None:
    result = _decide(vcs=FakeVcs(tags=["v2.3.4", "v2.3.5"]), store=FakeStore(stable="2.3.4"))

    assert isinstance(result, Ok)
    assert result.value.mode is CheckoutMode.RELEASE
    assert result.value.tag == "v2.3.5"
    assert result.value.release_version == "2.3.5"


def test_comparison_is_plain_string_equality() -> None:
    result = _decide(vcs=FakeVcs(tags=["1.2.0"]), store=FakeStore(stable="1.2"))

    assert isinstance(result, Ok)
    assert result.value.mode is CheckoutMode.RELEASE


def test_never_published_is_release() -> None:
    result = _decide(vcs=FakeVcs(tags=["0.1"]), store=FakeStore(stable=""))

    assert isinstance(result, Ok)
    assert result.value.mode is CheckoutMode.RELEASE
    assert result.value.stable_version == ""


@pytest.mark.parametrize("failing", ["is_clean", "release_tags"])
def test_vcs_failures_propagate(failing: str) -> None:
    result = _decide(vcs=FakeVcs(tags=["1.0"], fail=failing))

    assert isinstance(result, Err)
    assert result.error.kind == "vcs_failed"


def test_store_failure_propagates() -> None:
    result = _decide(vcs=FakeVcs(tags=["1.0"]), store=FakeStore(fail=True))

    assert isinstance(result, Err)
    assert result.error.kind == "store_failed"


def test_describe_mentions_versions() -> None:
    decision = CheckoutDecision(
        mode=CheckoutMode.RELEASE,
        reason="unreleased_tag",
        tag="v1.10",
        release_version="1.10",
        stable_version="",
    )

    text = decision.describe()

    assert "1.10" in text
    assert "stable: none" in text
    assert "v1.10" in text
