"""Candidate problem statements awaiting enrichment."""
import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

from ps_enricher.exceptions import InputError

logger = logging.getLogger(__name__)

# Source JSON uses camelCase in places; map to our field names
_KEY_ALIASES = {
    "id": "external_id",
    "externalId": "external_id",
}

REQUIRED_FIELDS = ("title", "description", "organization", "department", "theme", "contact")
CATEGORIES = ("Software", "Hardware")


@dataclass(frozen=True)
class CandidateRecord:
    """Standardized problem statement loaded from the source list."""

    external_id: str
    title: str
    description: str
    organization: str
    department: str
    category: str
    theme: str
    contact: str
    youtube: str = ""
    dataset: str = ""

    @staticmethod
    def _clean(value: Any) -> str:
        """Strip strings and turn None into an empty string."""
        if value is None:
            return ""
        return str(value).strip()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CandidateRecord":
        """Build a candidate from one entry of the source list.

        Raises:
            InputError: if the entry is not a mapping or fails validate().
        """
        if not isinstance(data, Mapping):
            raise InputError(
                f"Problem statement must be an object, got {type(data).__name__}"
            )

        values = {}
        for key, value in data.items():
            values[_KEY_ALIASES.get(key, key)] = value

        record = cls(
            external_id=cls._clean(values.get("external_id")),
            title=cls._clean(values.get("title")),
            description=cls._clean(values.get("description")),
            organization=cls._clean(values.get("organization")),
            department=cls._clean(values.get("department")),
            category=cls._clean(values.get("category")),
            theme=cls._clean(values.get("theme")),
            contact=cls._clean(values.get("contact")),
            youtube=cls._clean(values.get("youtube")),
            dataset=cls._clean(values.get("dataset")),
        )
        record.validate()
        return record

    def validate(self) -> None:
        """Reject records the store must not accept.

        Raises:
            InputError: on a missing id, an empty required field, or a
                category other than Software or Hardware.
        """
        if not self.external_id:
            raise InputError("Problem statement is missing its id")

        missing = [name for name in REQUIRED_FIELDS if not getattr(self, name)]
        if missing:
            raise InputError(
                f"Problem statement {self.external_id} is missing required fields: "
                f"{', '.join(missing)}"
            )

        if self.category not in CATEGORIES:
            raise InputError(
                f"Problem statement {self.external_id} has invalid category "
                f"{self.category!r} (expected one of {', '.join(CATEGORIES)})"
            )

    def to_fields(self) -> dict:
        """Column values for the non-AI part of a stored record."""
        return asdict(self)


def external_id_of(candidate: Any) -> str:
    """Best-effort external id for reporting, even for malformed entries."""
    if isinstance(candidate, CandidateRecord):
        return candidate.external_id
    if isinstance(candidate, Mapping):
        for key in ("external_id", "id", "externalId"):
            if candidate.get(key):
                return str(candidate[key]).strip()
    return ""


def build_analysis_text(candidate: CandidateRecord) -> str:
    """Plain-text description sent to the text-analysis service.

    Field order is fixed; YouTube and Dataset lines only appear when set.
    """
    lines = [
        f"Title: {candidate.title}",
        f"Description: {candidate.description}",
        f"Organization: {candidate.organization}",
        f"Department: {candidate.department}",
        f"Category: {candidate.category}",
        f"Theme: {candidate.theme}",
        f"Contact: {candidate.contact}",
    ]
    if candidate.youtube:
        lines.append(f"YouTube: {candidate.youtube}")
    if candidate.dataset:
        lines.append(f"Dataset: {candidate.dataset}")
    return "\n".join(line.strip() for line in lines).strip()


def load_candidates(path: str | Path) -> list:
    """Load the list of problem statements from a JSON file.

    Entries are returned as-is; each one is validated when it is processed,
    so one bad entry does not stop the batch.

    Raises:
        InputError: if the file is missing, is not valid JSON, or does not
            contain a top-level list.
    """
    file_path = Path(path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise InputError(f"Problem statements file not found: {file_path}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in {file_path}: {e}") from e

    if not isinstance(data, list):
        raise InputError("JSON file should contain an array of problem statements")

    logger.info("Loaded %d problem statements from %s", len(data), file_path)
    return data
