"""Example walking through a risk register session.

Starts from the example events, edits the register the way the web
interface does and prints the analysis after each step.
"""

import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from riskcheck.core import RiskEventStore, build_event, setup_logging
from riskcheck.reporting import create_summary_report


def print_change(store):
    analysis = store.analysis
    print(
        f"  -> {analysis.total_risk_events} events, "
        f"expected loss ${analysis.average_loss:,.2f}, "
        f"{analysis.risk_level.value}"
    )


def main():
    setup_logging("WARNING")

    store = RiskEventStore()
    store.subscribe(print_change)

    print(create_summary_report(store.aggregator))
    print()

    print("Adding 'Cyber attack' ($250,000 at 4%)")
    store.add(build_event("Cyber attack", "250000", "4"))

    print("Raising 'Data breach' to $150,000")
    breach = store.events[1]
    store.update_by_id(breach.id, breach.model_copy(update={"possible_loss": 150000.0}))

    print("Removing 'Everything will be fine'")
    store.remove_at(5)

    print()
    print(create_summary_report(store.aggregator))


if __name__ == "__main__":
    main()
