"""
Check a learner's stored progress for one module.

Displays the retention states and most recent reviews straight from the
database, without needing the module's item list.

Usage:
    # Overview of a module
    python -m scripts.maintenance.check_progress --module spanish-animals

    # Specific learner, more history
    python -m scripts.maintenance.check_progress --module spanish-animals --learner maria --limit 20
"""

import argparse
from collections import Counter
from typing import Optional

from vocabone.sm2 import RetentionState, SqlStateStore, days_until_due, utc_now


def summarize(states: dict[str, RetentionState], now=None) -> dict:
    """Counts of studied, due, overdue and mastered items."""
    now = now or utc_now()
    due_days = {item_id: days_until_due(state, now) for item_id, state in states.items()}

    return {
        "studied": len(states),
        "due_today": sum(1 for days in due_days.values() if days <= 0),
        "overdue": sum(1 for days in due_days.values() if days < 0),
        "mastered": sum(1 for state in states.values() if state.mastered),
        "upcoming": Counter(days for days in due_days.values() if 0 < days <= 7),
    }


def display_state(item_id: str, state: RetentionState, now) -> None:
    """Display one item's retention state on a single line."""
    print(
        f"  {item_id:<24} interval={state.interval:>4}d  ease={state.ease_factor:.2f}  "
        f"reps={state.repetitions}  due_in={days_until_due(state, now):>4}d"
        + ("  [mastered]" if state.mastered else "")
    )


def main(argv: Optional[list[str]] = None) -> dict:
    parser = argparse.ArgumentParser(description="Check stored retention progress")
    parser.add_argument("--module", required=True, help="Module id")
    parser.add_argument("--learner", help="Learner id (default: DEFAULT_LEARNER_ID)")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    parser.add_argument("--limit", type=int, default=10, help="Number of recent reviews to show")
    args = parser.parse_args(argv)

    store = SqlStateStore(args.module, learner_id=args.learner, database_url=args.database_url)
    store.init_db()

    now = utc_now()
    states = store.get_all()
    summary = summarize(states, now)

    print("=" * 80)
    print(f"MODULE: {args.module}   LEARNER: {store.learner_id}")
    print("-" * 80)
    print(f"Studied:   {summary['studied']}")
    print(f"Due today: {summary['due_today']} ({summary['overdue']} overdue)")
    print(f"Mastered:  {summary['mastered']}")

    if summary["upcoming"]:
        print("\nUpcoming reviews:")
        for days in sorted(summary["upcoming"]):
            print(f"  in {days} day(s): {summary['upcoming'][days]}")

    if states:
        print("\nItems (most urgent first):")
        for item_id, state in sorted(states.items(), key=lambda pair: days_until_due(pair[1], now)):
            display_state(item_id, state, now)

    events = store.get_recent_events(limit=args.limit)
    print(f"\nRecent reviews ({len(events)}):")
    if not events:
        print("  (no reviews yet)")
    for event in events:
        tier = event["tier"] or "self-graded"
        print(
            f"  {event['timestamp']}  {event['item_id']:<24} q={event['quality']}  {tier:<11} "
            f"interval {event['interval_before']} -> {event['interval_after']}"
        )
    print("=" * 80)

    return summary


if __name__ == "__main__":
    main()
