"""Pytest fixtures for enricher tests."""
import asyncio
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ps_enricher.analysis.schema import AnalysisFailure, parse_analysis_payload
from ps_enricher.persistence.models import Base
from ps_enricher.persistence.store import ProblemStatementStore
from ps_enricher.pipeline.enricher import Enricher, PacingPolicy


DEFAULT_PAYLOAD = {
    "tags": ["agriculture", "crop monitoring"],
    "techStack": ["Python", "TensorFlow", "React"],
    "summary": "Build a system that detects crop disease from leaf images.",
    "approach": ["Collect images", "Train classifier", "Deploy mobile app"],
    "difficultyLevel": "hard",
}


# =============================================================================
# TEST DOUBLES
# =============================================================================


class StubAnalyzer:
    """In-memory analyzer that records every call.

    Behaviour is chosen per problem statement title: listed titles fail,
    raise, or hang; everything else gets ``payload``.
    """

    def __init__(
        self,
        payload=None,
        fail_titles=(),
        raise_titles=(),
        slow_titles=(),
    ):
        self.payload = DEFAULT_PAYLOAD if payload is None else payload
        self.fail_titles = set(fail_titles)
        self.raise_titles = set(raise_titles)
        self.slow_titles = set(slow_titles)
        self.calls: list[str] = []

    async def analyze(self, text):
        self.calls.append(text)
        title = text.splitlines()[0].removeprefix("Title: ")
        if title in self.slow_titles:
            await asyncio.sleep(5)
        if title in self.raise_titles:
            raise ConnectionError("analysis service unreachable")
        if title in self.fail_titles:
            return AnalysisFailure(error="quota exceeded")
        return parse_analysis_payload(dict(self.payload))


class RecordingSleeper:
    """Stands in for asyncio.sleep and remembers each requested delay."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def store(test_db):
    return ProblemStatementStore(test_db)


# =============================================================================
# PIPELINE FIXTURES
# =============================================================================


@pytest.fixture
def analyzer():
    return StubAnalyzer()


@pytest.fixture
def sleeper():
    return RecordingSleeper()


@pytest.fixture
def enricher(store, analyzer, sleeper):
    """Enricher wired to the in-memory store, stub analyzer and fake sleep."""
    return Enricher(store, analyzer, pacing=PacingPolicy(2.0, sleep=sleeper))


@pytest.fixture
def make_candidate():
    """
    Factory fixture for source problem statement entries.

    Usage:
        ps = make_candidate("SIH25001", title="Crop disease detection")
    """

    def _make(external_id="SIH25001", **overrides):
        data = {
            "id": external_id,
            "title": f"Problem {external_id}",
            "description": "Farmers lack early warning for crop disease outbreaks.",
            "organization": "Ministry of Agriculture",
            "department": "Department of Agriculture Research",
            "category": "Software",
            "theme": "Agriculture, FoodTech & Rural Development",
            "contact": "nodal.officer@example.gov.in",
        }
        data.update(overrides)
        return data

    return _make
