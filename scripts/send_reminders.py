"""Run the contest reminder job once from the command line."""

from __future__ import annotations

import argparse
import logging
from datetime import timedelta

from contest_tracker.application.use_cases.reminders import dispatch_reminders
from contest_tracker.config import get_settings
from contest_tracker.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the reminder job."""

    parser = argparse.ArgumentParser(
        description="Email reminders for contests that start soon.",
    )
    parser.add_argument(
        "--lookahead",
        type=int,
        default=None,
        help="Minutes ahead to look for starting contests (default: REMINDER_LOOKAHEAD_MINUTES)",
    )
    return parser.parse_args()


def main() -> None:
    """Dispatch pending reminders and print a summary of the run."""

    args = parse_args()
    logging.basicConfig(level=get_settings().log_level.upper())
    lookahead = timedelta(minutes=args.lookahead) if args.lookahead else None

    initialize_database()

    session = SessionLocal()
    try:
        result = dispatch_reminders(session, lookahead=lookahead)
    finally:
        session.close()

    print(
        f"{result.message}\n"
        f"  Sent: {result.sent}\n"
        f"  Failed: {result.failed}\n"
        f"  Cleaned up: {result.deleted}"
    )
    for error in result.errors:
        print(f"  - {error}")
    if not result.success:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
