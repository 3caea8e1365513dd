"""Problem statement store backed by SQLAlchemy."""
import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ps_enricher.exceptions import DuplicateRecordError
from ps_enricher.persistence.database import (
    build_engine,
    init_db,
    make_session_factory,
    session_scope,
)
from ps_enricher.persistence.models import ProblemStatement

logger = logging.getLogger(__name__)


class ProblemStatementStore:
    """Lookup and persistence of enriched problem statements."""

    def __init__(self, session: Session):
        """
        Initialize the store.

        Args:
            session: Database session
        """
        self.session = session

    def find_by_external_id(self, external_id: str) -> Optional[ProblemStatement]:
        """Get a problem statement by its source id."""
        stmt = select(ProblemStatement).where(ProblemStatement.external_id == external_id)
        return self.session.execute(stmt).scalars().first()

    def insert(self, document: dict) -> ProblemStatement:
        """
        Persist a new enriched problem statement.

        Args:
            document: Column values, including ``external_id``

        Returns:
            The saved ProblemStatement

        Raises:
            DuplicateRecordError: a record with the same external id already exists
        """
        record = ProblemStatement(**document)
        self.session.add(record)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateRecordError(document.get("external_id", "")) from e
        except Exception:
            # Keep the session usable for the next item
            self.session.rollback()
            raise

        self.session.refresh(record)
        return record

    def find_missing_analysis(self) -> list[ProblemStatement]:
        """Records with at least one empty AI-generated field."""
        stmt = select(ProblemStatement).order_by(
            ProblemStatement.created_at, ProblemStatement.external_id
        )
        # Empty JSON lists can't be filtered portably in SQL
        return [
            ps for ps in self.session.execute(stmt).scalars()
            if not ps.has_complete_analysis
        ]

    def update_analysis(self, record: ProblemStatement, fields: dict) -> ProblemStatement:
        """Overwrite the AI-generated fields of an existing record."""
        for key, value in fields.items():
            setattr(record, key, value)
        self.session.commit()
        self.session.refresh(record)
        return record

    def rollback(self) -> None:
        """Discard the current transaction, e.g. after a failed query."""
        self.session.rollback()

    def count(self) -> int:
        """Total number of stored problem statements."""
        return self.session.execute(select(func.count(ProblemStatement.id))).scalar_one()


@contextmanager
def open_store(database_url: str) -> Generator[ProblemStatementStore, None, None]:
    """Open a store for the duration of a run.

    Creates the schema if needed and releases the session and the engine's
    connection pool on every exit path.
    """
    engine = build_engine(database_url)
    try:
        init_db(engine)
        factory = make_session_factory(engine)
        with session_scope(factory) as session:
            logger.info("Connected to database")
            yield ProblemStatementStore(session)
    finally:
        engine.dispose()
        logger.info("Database connection closed")
