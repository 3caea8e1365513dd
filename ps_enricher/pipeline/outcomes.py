"""Per-item outcomes and the run summary."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class OutcomeKind(str, Enum):
    """How processing one problem statement ended."""

    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"  # analysis service reported a failure
    ERROR = "error"  # unexpected exception

    @property
    def is_failure(self) -> bool:
        return self in (OutcomeKind.FAILED, OutcomeKind.ERROR)


@dataclass
class Outcome:
    """Result of processing a single problem statement."""

    kind: OutcomeKind
    external_id: str
    message: str
    record: Optional[dict] = None
    analysis: Optional[dict] = None

    def to_dict(self) -> dict:
        return {
            "id": self.external_id,
            "action": self.kind.value,
            "success": not self.kind.is_failure,
            "message": self.message,
            "data": self.record,
            "aiData": self.analysis,
        }


@dataclass
class RunSummary:
    """Aggregate of one batch run, outcomes kept in input order."""

    outcomes: list[Outcome] = field(default_factory=list)
    # Set when the input list itself was unusable and nothing ran
    input_error: Optional[str] = None

    def add(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    def _count(self, *kinds: OutcomeKind) -> int:
        return sum(1 for o in self.outcomes if o.kind in kinds)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def created(self) -> int:
        return self._count(OutcomeKind.CREATED)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeKind.SKIPPED)

    @property
    def failed(self) -> int:
        """Failed and errored items together."""
        return self._count(OutcomeKind.FAILED, OutcomeKind.ERROR)

    @property
    def failures(self) -> list[Outcome]:
        return [o for o in self.outcomes if o.kind.is_failure]

    def counts(self) -> dict:
        return {
            "total": self.total,
            "created": self.created,
            "skipped": self.skipped,
            "failed": self.failed,
        }

    def to_dict(self) -> dict:
        data = {**self.counts(), "details": [o.to_dict() for o in self.outcomes]}
        if self.input_error:
            data["error"] = self.input_error
        return data
