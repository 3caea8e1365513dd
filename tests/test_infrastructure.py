"""Tests for infrastructure: logging, settings, engine construction."""
import logging
from pathlib import Path

from config.settings import Settings
from ps_enricher.exceptions import (
    AnalysisTimeoutError,
    DuplicateRecordError,
    EnrichmentError,
    InputError,
)
from ps_enricher.logging_config import setup_logging
from ps_enricher.persistence.database import build_engine


# =============================================================================
# Logging tests
# =============================================================================


class TestSetupLogging:
    """Test logging configuration."""

    def test_configures_console_handler(self):
        root = logging.getLogger()
        original_handlers = root.handlers.copy()
        original_level = root.level
        root.handlers.clear()

        try:
            setup_logging("DEBUG")
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0], logging.StreamHandler)
        finally:
            root.handlers = original_handlers
            root.setLevel(original_level)

    def test_idempotent(self):
        root = logging.getLogger()
        original_handlers = root.handlers.copy()
        original_level = root.level
        root.handlers.clear()

        try:
            setup_logging()
            setup_logging()
            assert len(root.handlers) == 1
        finally:
            root.handlers = original_handlers
            root.setLevel(original_level)

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "enricher.log"
        root = logging.getLogger()
        original_handlers = root.handlers.copy()
        original_level = root.level
        root.handlers.clear()

        try:
            setup_logging("INFO", str(log_file))
            logging.getLogger("ps_enricher.test").info("hello")

            assert log_file.exists()
            assert len(root.handlers) == 2
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = original_handlers
            root.setLevel(original_level)

    def test_quiets_noisy_libraries(self):
        root = logging.getLogger()
        original_handlers = root.handlers.copy()
        original_level = root.level
        root.handlers.clear()

        try:
            setup_logging("DEBUG")
            assert logging.getLogger("httpx").level == logging.WARNING
            assert logging.getLogger("google_genai").level == logging.WARNING
        finally:
            root.handlers = original_handlers
            root.setLevel(original_level)

    def test_unknown_level_falls_back_to_info(self):
        root = logging.getLogger()
        original_handlers = root.handlers.copy()
        original_level = root.level
        root.handlers.clear()

        try:
            setup_logging("CHATTY")
            assert root.level == logging.INFO
        finally:
            root.handlers = original_handlers
            root.setLevel(original_level)


# =============================================================================
# Settings tests
# =============================================================================


class TestSettings:
    """Test settings defaults and path resolution."""

    def test_defaults(self, monkeypatch):
        for var in ("DATABASE_URL", "GOOGLE_API_KEY", "PACING_DELAY_SECONDS"):
            monkeypatch.delenv(var, raising=False)

        s = Settings(_env_file=None)

        assert s.database_url == "sqlite:///problem_statements.db"
        assert s.google_api_key is None
        assert s.gemini_model == "gemini-2.5-flash-lite"
        assert s.pacing_delay_seconds == 2.0
        assert s.analysis_timeout_seconds == 120.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PACING_DELAY_SECONDS", "5")
        monkeypatch.setenv("GOOGLE_API_KEY", "test-key")

        s = Settings(_env_file=None)

        assert s.pacing_delay_seconds == 5.0
        assert s.google_api_key == "test-key"

    def test_relative_paths_resolve_against_project_root(self):
        s = Settings(_env_file=None, results_dir=Path("results"))
        assert s.results_path == s.project_root / "results"

    def test_absolute_paths_kept(self, tmp_path):
        s = Settings(_env_file=None, candidates_file=tmp_path / "ps.json")
        assert s.candidates_path == tmp_path / "ps.json"


# =============================================================================
# Engine and exception tests
# =============================================================================


class TestBuildEngine:
    """Test engine construction per backend."""

    def test_sqlite_engine(self):
        engine = build_engine("sqlite:///:memory:")
        assert engine.dialect.name == "sqlite"
        engine.dispose()


class TestExceptions:
    """Test the exception hierarchy."""

    def test_hierarchy(self):
        for exc in (InputError("x"), DuplicateRecordError("A"), AnalysisTimeoutError(1.5)):
            assert isinstance(exc, EnrichmentError)

    def test_messages(self):
        assert str(DuplicateRecordError("SIH1")) == "Problem statement already exists: SIH1"
        assert str(AnalysisTimeoutError(120.0)) == "Analysis timed out after 120s"
        assert str(AnalysisTimeoutError(0.5)) == "Analysis timed out after 0.5s"
