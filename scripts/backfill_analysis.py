#!/usr/bin/env python3
"""Backfill AI-generated fields for stored problem statements.

Finds problem statements whose tags, tech stack, summary, approach or
difficulty are missing and re-analyzes them with Gemini.

Usage:
    python scripts/backfill_analysis.py
    python scripts/backfill_analysis.py --delay 5
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
from ps_enricher.main import run_backfill

logger = logging.getLogger(__name__)


async def main() -> int:
    setup_logging(settings.log_level, settings.log_file)

    parser = argparse.ArgumentParser(description="Backfill missing AI analysis on stored problem statements.")
    parser.add_argument("--delay", type=float, default=None, help="Seconds to wait between records.")
    parser.add_argument("--timeout", type=float, default=None, help="Per-call analysis timeout in seconds.")
    parser.add_argument("--no-report", action="store_true", help="Don't write the JSON results file.")
    args = parser.parse_args()

    summary = await run_backfill(
        delay=args.delay,
        timeout=args.timeout,
        save_report=not args.no_report,
    )
    return 1 if summary.failed else 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        sys.exit(1)
    except Exception as e:
        logger.error("Error: %s", e)
        sys.exit(1)
