"""
Print the metrics for the saved calculator inputs.

Usage: python scripts/show_metrics.py [field=value ...]
Overrides are applied on top of the saved snapshot without saving them.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from strcalc.calculations.display import build_display
from strcalc.db.database import init_db
from strcalc.services.session import CalculatorSession
from strcalc.services.snapshots import SqlSnapshotStore


def parse_overrides(args):
    overrides = {}
    for arg in args:
        name, sep, value = arg.partition("=")
        if not sep:
            print(f"Ignoring '{arg}': expected field=value")
            continue
        overrides[name] = value
    return overrides


def main():
    init_db()
    store = SqlSnapshotStore()
    session = CalculatorSession(store.load())
    session.update(parse_overrides(sys.argv[1:]))

    display = build_display(session.metrics())

    print("Inputs:")
    for name, value in session.inputs.items():
        print(f"  {name}: {value:,.2f}")

    for key, heading in [("key_metrics", "Key Metrics"), ("after_tax", "After Tax")]:
        print(f"\n{heading}:")
        for card in display[key]:
            print(f"  {card['label']}: {card['formatted']} ({card['rating']})")

    print(f"\nAssessment: {display['assessment']['message']}")

    for key, heading in [
        ("revenue", "Revenue"),
        ("expenses", "Expenses"),
        ("financing", "Financing"),
        ("tax", "Tax"),
    ]:
        print(f"\n{heading}:")
        for line in display[key]:
            print(f"  {line['label']}: {line['formatted']}")


if __name__ == "__main__":
    main()
