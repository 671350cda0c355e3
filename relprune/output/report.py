"""Run reporting: the summary line and the failure signal."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from relprune.core.inputs import PruneInputs
    from relprune.output.console import ConsoleProtocol
    from relprune.services.prune import PruneSummary

__all__ = [
    "report_inputs",
    "summary_line",
    "report_summary",
    "report_failure",
    "report_unexpected",
]


def report_inputs(console: ConsoleProtocol, inputs: PruneInputs) -> None:
    """Echo the resolved inputs before the repository context is read."""
    console.info(f"Processing tags: {', '.join(inputs.tag_names)}")
    console.info(f"Keeping assets newer than: {inputs.keep_days_label} days")


def summary_line(summary: PruneSummary) -> str:
    if summary.dry_run:
        return (
            f"Process completed. {summary.considered} assets considered, "
            f"{summary.deleted} would be deleted (dry run)."
        )
    return (
        f"Process completed. {summary.considered} assets considered, "
        f"{summary.deleted} assets deleted successfully."
    )


def report_summary(console: ConsoleProtocol, summary: PruneSummary) -> None:
    console.newline()
    console.success(summary_line(summary))


def report_failure(console: ConsoleProtocol, message: str, hint: str | None = None) -> None:
    """Emit the terminal failure for a run that did not get past setup."""
    console.error(message)
    if hint:
        console.info(f"hint: {hint}")


def report_unexpected(console: ConsoleProtocol, error: BaseException) -> None:
    report_failure(console, f"Action failed with error: {error}")
