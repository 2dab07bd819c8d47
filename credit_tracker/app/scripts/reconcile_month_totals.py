"""CLI utility to detect and repair month totals that drifted from their weeks."""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from ..database import session_scope
from ..services.reconciliation import ReconciliationService
from ..store import SqlAlchemyStore

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Compare every month's stored total credit with the sum of its weeks; "
            "suitable for cron or scheduled jobs."
        )
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Recalculate the totals of the months that drifted.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every mismatch found.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)

    with session_scope() as db:
        store = SqlAlchemyStore(db)
        mismatches = ReconciliationService.find_month_total_drift(store)

        if not mismatches:
            LOGGER.info("Month totals: no drift found")
            return 0

        LOGGER.warning("Month totals: %s months drifted", len(mismatches))
        for mismatch in mismatches:
            LOGGER.debug(
                "%s %s stored %s, weeks add up to %s",
                mismatch.name,
                mismatch.year,
                mismatch.stored_total,
                mismatch.weeks_total,
            )
            if args.fix:
                ReconciliationService.recalculate_month_total(store, mismatch.month_id)

    if args.fix:
        LOGGER.info("Recalculated %s month totals", len(mismatches))
        return 0
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
