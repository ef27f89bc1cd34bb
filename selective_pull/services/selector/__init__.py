"""Snapshot-or-release selection for snap override-pull scriptlets."""

from selective_pull.services.selector.errors import SelectorError
from selective_pull.services.selector.model import (
    UNKNOWN_VERSION,
    CheckoutDecision,
    CheckoutMode,
    InvocationFlags,
    SelectionOutcome,
)
from selective_pull.services.selector.service import run_selective_pull

__all__ = [
    "UNKNOWN_VERSION",
    "CheckoutDecision",
    "CheckoutMode",
    "InvocationFlags",
    "SelectionOutcome",
    "SelectorError",
    "run_selective_pull",
]
