#!/usr/bin/env python3
"""Enrich Smart India Hackathon problem statements with AI-generated metadata.

Loads problem statements from a JSON array, skips the ones already in the
database, and stores the rest with tags, tech stack, summary, approach and
difficulty generated by Gemini.

Usage:
    python scripts/process_problem_statements.py                  # Process all
    python scripts/process_problem_statements.py --single 25001   # One PS by id
    python scripts/process_problem_statements.py --file ps.json --delay 5

Environment variables:
    DATABASE_URL: SQLAlchemy connection string
    GOOGLE_API_KEY: Gemini API key (required)
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from scripts.bootstrap import settings
from ps_enricher.logging_config import setup_logging
from ps_enricher.main import run_enrichment, run_single

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Enrich problem statements with AI-generated data.")
    parser.add_argument(
        "--single",
        metavar="ID",
        help="Process only the problem statement with this id.",
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help=f"JSON file with problem statements (default: {settings.candidates_file}).",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait between problem statements.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds before a single analysis call is abandoned.",
    )
    parser.add_argument(
        "--no-report",
        action="store_true",
        help="Don't write the JSON results file.",
    )
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(settings.log_level, settings.log_file)

    if args.single:
        outcome = await run_single(args.single, args.file, timeout=args.timeout)
        if outcome is None or outcome.kind.is_failure:
            return 1
        return 0

    summary = await run_enrichment(
        args.file,
        delay=args.delay,
        timeout=args.timeout,
        save_report=not args.no_report,
    )
    return 1 if summary.input_error or summary.failed else 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        sys.exit(1)
    except Exception as e:
        logger.error("Error: %s", e)
        sys.exit(1)
