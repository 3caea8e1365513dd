"""Analyzer protocol for pluggable text-analysis services.

GeminiAnalyzer is the production implementation; tests substitute
in-memory stubs that satisfy the same protocol.
"""
from typing import Protocol, runtime_checkable

from ps_enricher.analysis.schema import AnalysisResult


@runtime_checkable
class TextAnalyzer(Protocol):
    """Protocol for services that turn problem statement text into metadata."""

    async def analyze(self, text: str) -> AnalysisResult:
        """Analyze the text.

        Returns AnalysisSuccess or AnalysisFailure; reported failures are
        values, not exceptions.
        """
        ...
