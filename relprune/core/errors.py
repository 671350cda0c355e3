"""Exit codes and setup-time exceptions.

Recoverable failures (a missing release, a failed delete) never leave the
processing loop. The types here cover what ends a run.
"""

from enum import IntEnum

__all__ = ["ErrorCode", "ContextError", "InvalidCutoffError"]


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are used as process exit codes and should remain stable:
    - 0: Success (including runs where some deletions failed)
    - 1: User error (missing or invalid inputs, unreadable config file)
    - 2: Environment error (target repository cannot be determined)
    - 3: Internal error (any other unexpected fault)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    INTERNAL_ERROR = 3

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK


class ContextError(Exception):
    """The execution context does not identify a repository."""


class InvalidCutoffError(ValueError):
    """The retention cutoff is not a representable instant."""
