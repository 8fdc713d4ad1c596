"""
Recalculate statistics for finished legs of one variant.

This script:
1. Selects one leg, or every finished leg of the variant created since a date
2. Replays each leg with the variant's scoring rule
3. Logs the resulting UPDATE statements (dry run) or writes them in one transaction

Usage:
    python -m scripts.recalculate_statistics --type 1 --since 2024-01-01
    python -m scripts.recalculate_statistics --type 4 --leg 1234 --apply
"""
import sys
from typing import Optional

from core.logging import configure_from_settings
from core.settings import settings
from db.base import close_db, init_db
from pipelines.recalculate_statistics import RecalculateStatisticsPipeline, parse_since
from schemas.common import ApiStatus


def recalculate(match_type: int, leg_id: Optional[int], since: str, dry_run: bool) -> int:
    """
    Run the recalculation pipeline and print a summary.

    Args:
        match_type: Variant id
        leg_id: Single leg to recalculate, or None for every finished leg
        since: ISO date, or "(All Time)"
        dry_run: If True, only log the statements without writing them

    Returns:
        Process exit code
    """
    print("Initializing database connection...")
    init_db()

    try:
        pipeline = RecalculateStatisticsPipeline(
            match_type,
            leg_id=leg_id,
            since=None if leg_id is not None else parse_since(since),
            dry_run=dry_run,
        )
        result = pipeline.run()

        print("\n" + "=" * 60)
        print("SUMMARY" + (" [DRY RUN]" if dry_run else ""))
        print("=" * 60)
        print(f"Legs recalculated: {result.legs_processed}")
        print(f"Rows {'to update' if dry_run else 'updated'}: {result.records_processed}")

        if result.status != ApiStatus.SUCCESS:
            print(f"\nFailed: {result.error}")
            return 1
        return 0

    finally:
        close_db()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Recalculate statistics for finished legs")
    parser.add_argument("--type", type=int, required=True, dest="match_type", help="Match type id to recalculate")
    parser.add_argument("-l", "--leg", type=int, default=None, help="Recalculate a single leg")
    parser.add_argument(
        "-s", "--since",
        default=settings.recalculation_since,
        help='Only legs created on or after this date (default: "(All Time)")',
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--dry-run", dest="dry_run", action="store_true", help="Log statements without writing them")
    mode.add_argument("--apply", dest="dry_run", action="store_false", help="Write the recalculated statistics")
    parser.set_defaults(dry_run=settings.recalculation_dry_run)

    args = parser.parse_args()

    configure_from_settings(settings)
    sys.exit(recalculate(args.match_type, args.leg, args.since, args.dry_run))
