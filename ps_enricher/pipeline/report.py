"""Run summary reporting."""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from ps_enricher.pipeline.outcomes import RunSummary

logger = logging.getLogger(__name__)


def log_summary(summary: RunSummary, title: str = "PROCESSING SUMMARY") -> None:
    """Log the totals and every failed item."""
    logger.info("=" * 60)
    logger.info(title)
    logger.info("=" * 60)
    logger.info("Total processed: %d", summary.total)
    logger.info("Created: %d", summary.created)
    logger.info("Skipped (already exists): %d", summary.skipped)
    logger.info("Failed: %d", summary.failed)
    logger.info("=" * 60)

    if summary.failures:
        logger.info("FAILED ITEMS:")
        for outcome in summary.failures:
            logger.info("- %s: %s", outcome.external_id or "<no id>", outcome.message)


def write_report(summary: RunSummary, results_dir: str | Path) -> Path:
    """Save the run summary as JSON.

    Returns:
        Path of the written report
    """
    directory = Path(results_dir)
    directory.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    path = directory / f"processing_results_{timestamp}.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(summary.to_dict(), f, indent=2, ensure_ascii=False, default=str)

    logger.info("Detailed results saved to: %s", path)
    return path
