from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

UNKNOWN_VERSION = "unknown"

type DecisionReason = Literal[
    "forced",
    "no_vcs",
    "dirty",
    "no_release_tags",
    "already_stable",
    "unreleased_tag",
]


class CheckoutMode(Enum):
    SNAPSHOT = "snapshot"
    RELEASE = "release"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class InvocationFlags:
    force_snapshot: bool = False
    dry_run: bool = False
    debug: bool = False


@dataclass(frozen=True, slots=True)
class CheckoutDecision:
    """Outcome of the checkout-mode decision.

    `tag`, `release_version` and `stable_version` are only filled in once the
    decision got as far as comparing against the store.
    """

    mode: CheckoutMode
    reason: DecisionReason
    tag: str | None = None
    release_version: str | None = None
    stable_version: str | None = None

    @classmethod
    def snapshot(cls, reason: DecisionReason) -> CheckoutDecision:
        return cls(mode=CheckoutMode.SNAPSHOT, reason=reason)

    def describe(self) -> str:
        match self.reason:
            case "forced":
                return "snapshot forced from the command line"
            case "no_vcs":
                return "no git history found, building a snapshot"
            case "dirty":
                return "working tree has uncommitted changes, building a snapshot"
            case "no_release_tags":
                return "no release tag found, building a snapshot"
            case "already_stable":
                return (
                    f"latest release {self.release_version} is already in stable, "
                    "building a snapshot"
                )
            case "unreleased_tag":
                return (
                    f"latest release {self.release_version} is not in stable "
                    f"(stable: {self.stable_version or 'none'}), building tag {self.tag}"
                )


@dataclass(frozen=True, slots=True)
class SelectionOutcome:
    decision: CheckoutDecision
    version: str
