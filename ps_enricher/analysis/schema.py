"""Validated result types for problem statement analysis."""
import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class Difficulty(str, Enum):
    """Difficulty levels the analyzer may assign."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ProblemAnalysis(BaseModel):
    """Structured metadata returned by the text-analysis service.

    Every field is optional: a field the service leaves out is filled in by
    apply_analysis_defaults() instead of failing the item.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tags: Optional[list[str]] = None
    tech_stack: Optional[list[str]] = Field(default=None, alias="techStack")
    summary: Optional[str] = None
    approach: Optional[list[str]] = None
    difficulty_level: Optional[Difficulty] = Field(default=None, alias="difficultyLevel")

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() or None
        return value


# Field -> value used when the service omits it
ANALYSIS_DEFAULTS: dict[str, Any] = {
    "tags": [],
    "tech_stack": [],
    "summary": "",
    "approach": [],
    "difficulty_level": Difficulty.MEDIUM.value,
}


def apply_analysis_defaults(analysis: ProblemAnalysis) -> dict:
    """Column values for the AI-generated fields, defaults filled in."""
    values = {}
    for name, default in ANALYSIS_DEFAULTS.items():
        value = getattr(analysis, name)
        if value is None:
            value = list(default) if isinstance(default, list) else default
        elif isinstance(value, Difficulty):
            value = value.value
        values[name] = value
    return values


@dataclass(frozen=True)
class AnalysisSuccess:
    """The service produced structured output."""

    analysis: ProblemAnalysis
    raw: dict = field(default_factory=dict)

    ok = True


@dataclass(frozen=True)
class AnalysisFailure:
    """The service reported it could not analyze the text."""

    error: str

    ok = False


AnalysisResult = Union[AnalysisSuccess, AnalysisFailure]


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\n?", "", text)
        text = re.sub(r"\n?```$", "", text)
    return text.strip()


def parse_analysis_payload(payload: Any) -> AnalysisResult:
    """Validate an untyped service response into an AnalysisResult.

    Accepts a dict or JSON text (optionally wrapped in a markdown code
    block). Anything that doesn't validate becomes an AnalysisFailure.
    """
    if isinstance(payload, (str, bytes)):
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8", errors="replace")
        try:
            payload = json.loads(_strip_code_fences(payload))
        except json.JSONDecodeError as e:
            return AnalysisFailure(error=f"Response was not valid JSON: {e}")

    if not isinstance(payload, dict):
        return AnalysisFailure(
            error=f"Expected a JSON object, got {type(payload).__name__}"
        )

    try:
        analysis = ProblemAnalysis.model_validate(payload)
    except ValidationError as e:
        return AnalysisFailure(error=f"Response failed validation: {e.error_count()} error(s)")

    return AnalysisSuccess(analysis=analysis, raw=payload)
