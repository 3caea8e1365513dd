"""Run entry points for the problem statement enricher."""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from config.settings import Settings, settings as default_settings
from ps_enricher.analysis.analyzer_protocol import TextAnalyzer
from ps_enricher.analysis.gemini import GeminiAnalyzer
from ps_enricher.candidates import load_candidates
from ps_enricher.exceptions import InputError
from ps_enricher.persistence.store import open_store
from ps_enricher.pipeline.backfill import backfill_missing_analysis
from ps_enricher.pipeline.enricher import Enricher, PacingPolicy
from ps_enricher.pipeline.outcomes import Outcome, RunSummary
from ps_enricher.pipeline.report import log_summary, write_report

logger = logging.getLogger(__name__)


def build_analyzer(config: Settings) -> GeminiAnalyzer:
    """Gemini analyzer configured from settings."""
    return GeminiAnalyzer(
        api_key=config.google_api_key,
        model=config.gemini_model,
        temperature=config.analysis_temperature,
    )


def _resolve_options(
    config: Settings,
    delay: Optional[float],
    timeout: Optional[float],
) -> tuple[PacingPolicy, float]:
    pacing = PacingPolicy(config.pacing_delay_seconds if delay is None else delay)
    return pacing, (config.analysis_timeout_seconds if timeout is None else timeout)


async def run_enrichment(
    candidates_file: Optional[Path] = None,
    *,
    config: Settings = default_settings,
    analyzer: Optional[TextAnalyzer] = None,
    delay: Optional[float] = None,
    timeout: Optional[float] = None,
    save_report: bool = True,
) -> RunSummary:
    """Enrich every problem statement in the candidates file.

    A malformed file is fatal: it is logged and an empty summary returned
    without touching the database or the analysis service.
    """
    path = candidates_file or config.candidates_path

    logger.info("=" * 60)
    logger.info("Starting enrichment run at %s", datetime.now().strftime("%Y-%m-%d %H:%M:%S"))
    logger.info("=" * 60)

    try:
        candidates = load_candidates(path)
    except InputError as e:
        logger.error("Error loading problem statements: %s", e)
        return RunSummary(input_error=str(e))

    if not candidates:
        logger.info("No problem statements to process")
        return RunSummary()

    pacing, analysis_timeout = _resolve_options(config, delay, timeout)
    analyzer = analyzer or build_analyzer(config)

    with open_store(config.database_url) as store:
        enricher = Enricher(store, analyzer, pacing=pacing, analysis_timeout=analysis_timeout)
        summary = await enricher.process_batch(candidates)

    log_summary(summary)
    if save_report:
        write_report(summary, config.results_path)
    return summary


async def run_single(
    external_id: str,
    candidates_file: Optional[Path] = None,
    *,
    config: Settings = default_settings,
    analyzer: Optional[TextAnalyzer] = None,
    timeout: Optional[float] = None,
) -> Optional[Outcome]:
    """Enrich one problem statement from the candidates file by its id.

    Returns None when the candidates file can't be loaded.
    """
    path = candidates_file or config.candidates_path
    logger.info("Processing single PS with ID: %s", external_id)

    try:
        candidates = load_candidates(path)
    except InputError as e:
        logger.error("Error loading problem statements: %s", e)
        return None

    _, analysis_timeout = _resolve_options(config, None, timeout)
    analyzer = analyzer or build_analyzer(config)

    with open_store(config.database_url) as store:
        enricher = Enricher(store, analyzer, analysis_timeout=analysis_timeout)
        outcome = await enricher.process_single(external_id, candidates)

    logger.info("Result: [%s] %s", outcome.kind.value, outcome.message)
    return outcome


async def run_backfill(
    *,
    config: Settings = default_settings,
    analyzer: Optional[TextAnalyzer] = None,
    delay: Optional[float] = None,
    timeout: Optional[float] = None,
    save_report: bool = True,
) -> RunSummary:
    """Fill in missing AI-generated fields on stored problem statements."""
    pacing, analysis_timeout = _resolve_options(config, delay, timeout)
    analyzer = analyzer or build_analyzer(config)

    with open_store(config.database_url) as store:
        summary = await backfill_missing_analysis(
            store, analyzer, pacing=pacing, analysis_timeout=analysis_timeout
        )

    log_summary(summary, title="BACKFILL SUMMARY")
    if save_report:
        write_report(summary, config.results_path)
    return summary
