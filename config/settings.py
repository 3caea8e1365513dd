"""Application settings using Pydantic."""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///problem_statements.db",
        description="SQLAlchemy database URL",
    )

    # Gemini text analysis
    google_api_key: Optional[str] = Field(
        default=None,
        description="Google AI Studio API key used for problem statement analysis",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash-lite",
        description="Gemini model used for analysis",
    )
    analysis_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for analysis requests",
    )
    analysis_timeout_seconds: float = Field(
        default=120.0,
        description="Maximum seconds to wait for a single analysis call",
    )

    # Batch pacing
    pacing_delay_seconds: float = Field(
        default=2.0,
        description="Delay between consecutive problem statements (seconds)",
    )

    # Paths
    candidates_file: Path = Field(
        default=Path("data/problem_statements.json"),
        description="JSON file holding the list of problem statements to enrich",
    )
    results_dir: Path = Field(
        default=Path("results"),
        description="Directory for processing result reports",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for a rotating log file",
    )

    @property
    def project_root(self) -> Path:
        """Project root directory."""
        return Path(__file__).parent.parent

    @property
    def candidates_path(self) -> Path:
        """Absolute path to the candidates file."""
        return self._resolve(self.candidates_file)

    @property
    def results_path(self) -> Path:
        """Absolute path to the results directory."""
        return self._resolve(self.results_dir)

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.project_root / path


# Global settings instance
settings = Settings()
