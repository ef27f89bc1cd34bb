"""Exit codes for the selective-pull command.

The packaging pipeline only distinguishes success from failure, so every
fatal condition (bad argument, missing configuration, failed external
command, inconsistent internal state) shares a single non-zero code.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values must remain stable."""

    OK = 0
    FATAL = 1
