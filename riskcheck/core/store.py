"""Observable state container for front-ends.

Wraps a RiskAggregator and notifies subscribed callbacks after each
successful mutation so views can refresh without the aggregator knowing
about them.
"""

from typing import Callable, List, Optional
from uuid import UUID

from .aggregator import RiskAggregator
from .data_models import RiskEvent, RiskAnalysis
from .logging_config import get_logger

logger = get_logger(__name__)

Subscriber = Callable[["RiskEventStore"], None]


class RiskEventStore:
    """Risk register state shared between a view and the aggregator."""

    def __init__(self, aggregator: Optional[RiskAggregator] = None) -> None:
        """Initialize store.

        Args:
            aggregator: Aggregator to wrap. A seeded one is created if omitted.
        """
        self.aggregator = aggregator if aggregator is not None else RiskAggregator()
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback invoked with the store after each change.

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)

    @property
    def events(self) -> List[RiskEvent]:
        return self.aggregator.events

    @property
    def analysis(self) -> RiskAnalysis:
        return self.aggregator.get_detailed_analysis()

    def add(self, event: RiskEvent) -> None:
        self.aggregator.add(event)
        self._notify()

    def remove_at(self, index: int) -> RiskEvent:
        removed = self.aggregator.remove_at(index)
        self._notify()
        return removed

    def update_at(self, event: RiskEvent, index: int) -> None:
        self.aggregator.update_at(event, index)
        self._notify()

    def remove_by_id(self, event_id: UUID) -> RiskEvent:
        """Remove the event carrying ``event_id``."""
        return self.remove_at(self.aggregator.index_of(event_id))

    def update_by_id(self, event_id: UUID, event: RiskEvent) -> None:
        """Replace the event carrying ``event_id`` with ``event``."""
        self.update_at(event, self.aggregator.index_of(event_id))
