"""Application services: retention rules and release processing."""

from relprune.services.prune import PruneService, PruneSummary, RunCounters
from relprune.services.retention import compute_cutoff, format_cutoff, select_expired

__all__ = [
    "PruneService",
    "PruneSummary",
    "RunCounters",
    "compute_cutoff",
    "format_cutoff",
    "select_expired",
]
