from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

type SelectorErrorKind = Literal[
    "usage",
    "missing_config",
    "invalid_config",
    "vcs_failed",
    "store_failed",
    "controller_failed",
    "internal",
]


@dataclass(frozen=True, slots=True)
class SelectorError:
    kind: SelectorErrorKind
    message: str
    hint: str | None = None
