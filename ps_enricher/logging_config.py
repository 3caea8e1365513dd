"""Root logger setup for the enrichment and backfill scripts.

Both entry points log one line per problem statement plus a summary block,
so a run can be followed live on the console and audited later from the
optional rotating log file.
"""
import logging
import logging.handlers
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP and SQL chatter from the Gemini client and SQLAlchemy
NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "sqlalchemy", "urllib3")

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3


def _file_handler(log_file: str, formatter: logging.Formatter) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Attach console (and optionally file) handlers to the root logger.

    Does nothing if the root logger already has handlers, so the scripts
    and tests can call it freely.

    Args:
        level: Level name from settings; unknown names fall back to INFO
        log_file: Path of a rotating log file, created with its directory
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        root.addHandler(_file_handler(log_file, formatter))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
