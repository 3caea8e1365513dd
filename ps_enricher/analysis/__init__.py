"""Text analysis of problem statements."""
from .analyzer_protocol import TextAnalyzer
from .gemini import GeminiAnalyzer
from .schema import (
    ANALYSIS_DEFAULTS,
    AnalysisFailure,
    AnalysisResult,
    AnalysisSuccess,
    Difficulty,
    ProblemAnalysis,
    apply_analysis_defaults,
    parse_analysis_payload,
)

__all__ = [
    "ANALYSIS_DEFAULTS",
    "AnalysisFailure",
    "AnalysisResult",
    "AnalysisSuccess",
    "Difficulty",
    "GeminiAnalyzer",
    "ProblemAnalysis",
    "TextAnalyzer",
    "apply_analysis_defaults",
    "parse_analysis_payload",
]
