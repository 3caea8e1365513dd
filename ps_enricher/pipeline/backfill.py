"""Backfill AI-generated fields on stored problem statements.

Maintenance pass for records that were stored without (or with partial)
analysis, e.g. imported before the enricher existed. Unlike the enrichment
pipeline, this updates existing records in place.
"""
import logging
from typing import Optional

from ps_enricher.analysis.analyzer_protocol import TextAnalyzer
from ps_enricher.analysis.schema import apply_analysis_defaults
from ps_enricher.candidates import CandidateRecord, build_analysis_text
from ps_enricher.persistence.models import ProblemStatement
from ps_enricher.persistence.store import ProblemStatementStore
from ps_enricher.pipeline.enricher import Enricher, PacingPolicy
from ps_enricher.pipeline.outcomes import Outcome, OutcomeKind, RunSummary

logger = logging.getLogger(__name__)


def _candidate_from_record(record: ProblemStatement) -> CandidateRecord:
    return CandidateRecord(
        external_id=record.external_id,
        title=record.title or "",
        description=record.description or "",
        organization=record.organization or "",
        department=record.department or "",
        category=record.category or "",
        theme=record.theme or "",
        contact=record.contact or "",
        youtube=record.youtube or "",
        dataset=record.dataset or "",
    )


async def _backfill_one(enricher: Enricher, record: ProblemStatement) -> Outcome:
    external_id = record.external_id
    try:
        text = build_analysis_text(_candidate_from_record(record))
        result = await enricher.analyze_text(text)

        if not result.ok:
            logger.error("AI analysis failed for PS %s: %s", external_id, result.error)
            return Outcome(
                kind=OutcomeKind.FAILED,
                external_id=external_id,
                message=f"AI analysis failed: {result.error}",
            )

        updated = enricher.store.update_analysis(record, apply_analysis_defaults(result.analysis))
        logger.info("Updated PS %s with AI-generated data", external_id)
        return Outcome(
            kind=OutcomeKind.CREATED,
            external_id=external_id,
            message=f"PS {external_id} updated successfully",
            record=updated.to_dict(),
            analysis=result.raw,
        )

    except Exception as e:
        logger.error("Error backfilling PS %s: %s", external_id, e, exc_info=True)
        enricher.reset_session()
        return Outcome(kind=OutcomeKind.ERROR, external_id=external_id, message=f"Error: {e}")


async def backfill_missing_analysis(
    store: ProblemStatementStore,
    analyzer: TextAnalyzer,
    pacing: Optional[PacingPolicy] = None,
    analysis_timeout: Optional[float] = None,
) -> RunSummary:
    """Re-analyze stored records whose AI fields are incomplete.

    Returns:
        RunSummary where ``created`` counts updated records
    """
    enricher = Enricher(store, analyzer, pacing=pacing, analysis_timeout=analysis_timeout)
    records = store.find_missing_analysis()
    logger.info("Found %d problem statements with incomplete analysis", len(records))

    summary = RunSummary()
    for i, record in enumerate(records):
        logger.info("Backfilling %d/%d: %s...", i + 1, len(records), (record.title or "")[:50])
        summary.add(await _backfill_one(enricher, record))

        if i < len(records) - 1:
            await enricher.pacing.wait()

    return summary
