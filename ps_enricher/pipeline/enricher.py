"""Enrichment pipeline for problem statements.

Takes candidate problem statements, skips the ones already stored, asks the
text-analysis service for tags, tech stack, summary, approach and
difficulty, and persists the merged record.

Items are processed strictly one at a time, in input order, with a fixed
pause between them to stay under the analysis service's rate limit.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from ps_enricher.analysis.analyzer_protocol import TextAnalyzer
from ps_enricher.analysis.schema import AnalysisResult, apply_analysis_defaults
from ps_enricher.candidates import CandidateRecord, build_analysis_text, external_id_of
from ps_enricher.exceptions import (
    AnalysisTimeoutError,
    DuplicateRecordError,
    EnrichmentError,
    InputError,
)
from ps_enricher.persistence.store import ProblemStatementStore
from ps_enricher.pipeline.outcomes import Outcome, OutcomeKind, RunSummary

logger = logging.getLogger(__name__)


class PacingPolicy:
    """Fixed delay applied between consecutive items."""

    def __init__(
        self,
        delay_seconds: float = 2.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Args:
            delay_seconds: Pause between items (0 disables the wait)
            sleep: Coroutine used to suspend; replaceable in tests
        """
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def wait(self) -> None:
        if self.delay_seconds > 0:
            logger.info("Waiting %.1f seconds before next problem statement...", self.delay_seconds)
        # Always suspend, even for a zero delay, so the loop yields between items
        await self._sleep(self.delay_seconds)


def _title_preview(candidate: Any, length: int = 50) -> str:
    if isinstance(candidate, CandidateRecord):
        title = candidate.title
    elif isinstance(candidate, dict):
        title = str(candidate.get("title") or "")
    else:
        title = ""
    return title[:length]


class Enricher:
    """Turns candidate problem statements into stored, enriched records."""

    def __init__(
        self,
        store: ProblemStatementStore,
        analyzer: TextAnalyzer,
        pacing: Optional[PacingPolicy] = None,
        analysis_timeout: Optional[float] = None,
    ):
        """
        Initialize the enricher.

        Args:
            store: Problem statement store
            analyzer: Text-analysis service
            pacing: Delay policy between items (defaults to 2 seconds)
            analysis_timeout: Seconds before an analysis call is abandoned;
                None waits indefinitely
        """
        self.store = store
        self.analyzer = analyzer
        self.pacing = pacing or PacingPolicy()
        self.analysis_timeout = analysis_timeout

    async def analyze_text(self, text: str) -> AnalysisResult:
        """Run the analyzer on text, bounded by ``analysis_timeout``.

        Raises:
            AnalysisTimeoutError: if the call outlives the timeout
        """
        if self.analysis_timeout is None:
            return await self.analyzer.analyze(text)
        try:
            return await asyncio.wait_for(
                self.analyzer.analyze(text), timeout=self.analysis_timeout
            )
        except asyncio.TimeoutError as e:
            raise AnalysisTimeoutError(self.analysis_timeout) from e

    def reset_session(self) -> None:
        """Roll back a failed transaction so the next item starts clean."""
        try:
            self.store.rollback()
        except Exception as e:
            logger.warning("Session rollback failed: %s", e)

    async def process_one(self, candidate: CandidateRecord | dict) -> Outcome:
        """Process a single problem statement.

        Never raises: every exception is reported as an ``error`` outcome.
        """
        external_id = external_id_of(candidate)
        try:
            if isinstance(candidate, CandidateRecord):
                candidate.validate()
            else:
                candidate = CandidateRecord.from_dict(candidate)

            existing = self.store.find_by_external_id(external_id)
            if existing is not None:
                logger.info("PS %s already exists. Skipping...", external_id)
                return Outcome(
                    kind=OutcomeKind.SKIPPED,
                    external_id=external_id,
                    message=f"PS {external_id} already exists",
                    record=existing.to_dict(),
                )

            logger.info("PS %s not found. Analyzing with AI...", external_id)
            result = await self.analyze_text(build_analysis_text(candidate))

            if not result.ok:
                logger.error("AI analysis failed for PS %s: %s", external_id, result.error)
                return Outcome(
                    kind=OutcomeKind.FAILED,
                    external_id=external_id,
                    message=f"AI analysis failed: {result.error}",
                )

            logger.info("AI analysis completed for PS %s", external_id)
            document = {**candidate.to_fields(), **apply_analysis_defaults(result.analysis)}

            try:
                saved = self.store.insert(document)
            except DuplicateRecordError as e:
                existing = self.store.find_by_external_id(external_id)
                if existing is None:
                    # Constraint violation that isn't a stored duplicate
                    raise EnrichmentError(f"Insert rejected for PS {external_id}") from e
                # Another run stored it between our lookup and insert
                logger.warning("PS %s was stored concurrently. Skipping...", external_id)
                return Outcome(
                    kind=OutcomeKind.SKIPPED,
                    external_id=external_id,
                    message=f"PS {external_id} already exists",
                    record=existing.to_dict(),
                )

            logger.info("Successfully saved PS %s with AI-generated data", external_id)
            return Outcome(
                kind=OutcomeKind.CREATED,
                external_id=external_id,
                message=f"PS {external_id} created successfully",
                record=saved.to_dict(),
                analysis=result.raw,
            )

        except Exception as e:
            logger.error("Error processing PS %s: %s", external_id or "<no id>", e, exc_info=True)
            self.reset_session()
            return Outcome(
                kind=OutcomeKind.ERROR,
                external_id=external_id,
                message=f"Error: {e}",
            )

    async def process_batch(self, candidates: list) -> RunSummary:
        """
        Process problem statements sequentially, in input order.

        Args:
            candidates: List of CandidateRecord or raw source dicts

        Returns:
            RunSummary with one outcome per candidate, in input order

        Raises:
            InputError: if candidates is not a list (nothing is processed)
        """
        if not isinstance(candidates, list):
            raise InputError(
                f"Expected a list of problem statements, got {type(candidates).__name__}"
            )

        summary = RunSummary()
        total = len(candidates)
        logger.info("Starting to process %d problem statements...", total)

        for i, candidate in enumerate(candidates):
            logger.info("Processing %d/%d: %s...", i + 1, total, _title_preview(candidate))

            outcome = await self.process_one(candidate)
            summary.add(outcome)

            # Skip delay after the last item
            if i < total - 1:
                await self.pacing.wait()

        return summary

    async def process_single(self, external_id: str, candidates: list) -> Outcome:
        """Process the one candidate with the given id from an already-loaded list."""
        if not isinstance(candidates, list):
            raise InputError(
                f"Expected a list of problem statements, got {type(candidates).__name__}"
            )

        for candidate in candidates:
            if external_id_of(candidate) == external_id:
                return await self.process_one(candidate)

        logger.error("Problem statement with ID %s not found in input", external_id)
        return Outcome(
            kind=OutcomeKind.ERROR,
            external_id=external_id,
            message=f"PS {external_id} not found in input",
        )
