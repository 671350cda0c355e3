"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relprune.core.errors import ErrorCode
from relprune.core.result import Ok, Result
from relprune.output.report import report_failure

if TYPE_CHECKING:
    from relprune.output.console import ConsoleProtocol


T = TypeVar("T")
E = TypeVar("E")


def value_or_exit[T, E](
    result: Result[T, E],
    console: ConsoleProtocol,
    error_code: ErrorCode = ErrorCode.USER_ERROR,
) -> T:
    """Return the Ok value, or report the error and exit.

    Expects error objects to have 'message' and optional 'hint' attributes.
    """
    if isinstance(result, Ok):
        return result.value
    error = result.error
    message: str = getattr(error, "message", str(error))
    hint: str | None = getattr(error, "hint", None)
    report_failure(console, message, hint)
    exit_with_code(int(error_code))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
