"""SQLAlchemy models for enriched problem statements."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Index, String, Text
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def generate_uuid() -> str:
    """Generate a UUID string."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class ProblemStatement(Base):
    """A Smart India Hackathon problem statement plus AI-generated metadata."""

    __tablename__ = "problem_statements"

    id = Column(String, primary_key=True, default=generate_uuid)
    # Stable id from the source list, used for deduplication
    external_id = Column(String, unique=True, nullable=False, index=True)

    # Source fields
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    organization = Column(String, nullable=False)
    department = Column(String, nullable=False)
    category = Column(String, nullable=False)  # Software, Hardware
    theme = Column(String, nullable=False)
    contact = Column(String, nullable=False)
    youtube = Column(String, default="")
    dataset = Column(String, default="")

    # AI-generated fields
    tags = Column(JSON, default=list)
    tech_stack = Column(JSON, default=list)
    summary = Column(Text, default="")
    approach = Column(JSON, default=list)
    difficulty_level = Column(String, nullable=True)  # easy, medium, hard

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_problem_statements_category", "category"),
        Index("ix_problem_statements_theme", "theme"),
        Index("ix_problem_statements_organization", "organization"),
    )

    @property
    def has_complete_analysis(self) -> bool:
        """True when every AI-generated field is present.

        An empty list is a real answer and counts as present; only text
        fields are missing when empty.
        """
        lists_present = all(
            value is not None for value in (self.tags, self.tech_stack, self.approach)
        )
        return lists_present and bool(self.summary) and bool(self.difficulty_level)

    def to_dict(self) -> dict:
        """Public view of the record, keyed the way the API and reports expect."""
        return {
            "id": self.external_id,
            "title": self.title,
            "description": self.description,
            "organization": self.organization,
            "department": self.department,
            "category": self.category,
            "theme": self.theme,
            "contact": self.contact,
            "youtube": self.youtube or "",
            "dataset": self.dataset or "",
            "tags": list(self.tags or []),
            "techStack": list(self.tech_stack or []),
            "summary": self.summary or "",
            "approach": list(self.approach or []),
            "difficultyLevel": self.difficulty_level,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<ProblemStatement {self.external_id}: {self.title[:40]}>"
