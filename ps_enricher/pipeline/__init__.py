"""Problem statement enrichment pipeline."""
from .backfill import backfill_missing_analysis
from .enricher import Enricher, PacingPolicy
from .outcomes import Outcome, OutcomeKind, RunSummary
from .report import log_summary, write_report

__all__ = [
    "Enricher",
    "Outcome",
    "OutcomeKind",
    "PacingPolicy",
    "RunSummary",
    "backfill_missing_analysis",
    "log_summary",
    "write_report",
]
