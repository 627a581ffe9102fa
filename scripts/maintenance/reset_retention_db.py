"""
Reset the retention database (SM-2).

DANGEROUS: This deletes all retention state and review history!
Only use when you want to start fresh for testing.

Usage:
    # Drop and recreate every table (all learners, all modules)
    python -m scripts.maintenance.reset_retention_db

    # Only forget one module's progress for one learner
    python -m scripts.maintenance.reset_retention_db --module spanish-animals --learner maria
"""

import argparse
from typing import Optional

from vocabone.sm2 import SqlStateStore


def main(argv: Optional[list[str]] = None, confirm=input) -> bool:
    parser = argparse.ArgumentParser(description="Reset the retention database")
    parser.add_argument("--module", help="Only reset this module")
    parser.add_argument("--learner", help="Learner id (default: DEFAULT_LEARNER_ID)")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    args = parser.parse_args(argv)

    print("=" * 60)
    print("WARNING: Reset Retention Database")
    print("=" * 60)
    print()
    if args.module:
        print(f"This will DELETE all retention state of module '{args.module}'.")
    else:
        print("This will DELETE all review history:")
        print("  - All retention states (interval, ease factor, etc.)")
        print("  - All review events (logs of past reviews)")
    print()

    response = confirm("Are you sure you want to reset? (type 'yes' to confirm): ")

    if response.lower() != "yes":
        print("\nCancelled. No changes made.")
        return False

    store = SqlStateStore(args.module or "", learner_id=args.learner, database_url=args.database_url)

    if args.module:
        store.init_db()
        deleted = store.reset_module()
        print(f"\n✓ Removed {deleted} retention states from {args.module}")
    else:
        print("\nResetting database...")
        store.reset_db()
        print("✓ Database reset complete!")
        print("\nThe database now has empty tables ready for new reviews.")
    return True


if __name__ == "__main__":
    main()
