"""Risk event aggregation.

Holds the ordered list of risk events, keeps their probabilities
normalized after every mutation and derives summary statistics from the
current state.
"""

import numpy as np
from typing import List, Optional, Tuple
from uuid import UUID

from .data_models import RiskEvent, RiskLevel, RiskAnalysis, default_events
from .exceptions import InvalidArgumentError
from .logging_config import get_logger

logger = get_logger(__name__)

LOW_RISK_THRESHOLD = 0.25
HIGH_RISK_THRESHOLD = 0.75


def classify_risk_level(cv: float,
                        low_threshold: float = LOW_RISK_THRESHOLD,
                        high_threshold: float = HIGH_RISK_THRESHOLD) -> RiskLevel:
    """Map a coefficient of variation onto a coarse risk level.

    Args:
        cv: Coefficient of variation
        low_threshold: Values below this are low risk
        high_threshold: Values at or above this are high risk

    Returns:
        Risk level
    """
    if cv < low_threshold:
        return RiskLevel.LOW
    if cv < high_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


class RiskAggregator:
    """Ordered collection of risk events with derived statistics.

    Every mutation renormalizes stored probabilities in place, so the
    original input probabilities are replaced by their normalized values.
    """

    def __init__(self,
                 events: Optional[List[RiskEvent]] = None,
                 low_threshold: float = LOW_RISK_THRESHOLD,
                 high_threshold: float = HIGH_RISK_THRESHOLD) -> None:
        """Initialize aggregator.

        Args:
            events: Initial events, stored as given. Defaults to the example events.
            low_threshold: Coefficient of variation below which risk is low
            high_threshold: Coefficient of variation from which risk is high
        """
        self._events: List[RiskEvent] = list(events) if events is not None else default_events()
        self.low_threshold = low_threshold
        self.high_threshold = high_threshold

    def __len__(self) -> int:
        return len(self._events)

    @property
    def events(self) -> List[RiskEvent]:
        """Copy of the current event list."""
        return list(self._events)

    def event_at(self, index: int) -> RiskEvent:
        """Event at ``index``.

        Raises:
            InvalidArgumentError: If index is out of range
        """
        self._check_index(index, 'read')
        return self._events[index]

    # Mutations

    def add(self, event: RiskEvent) -> None:
        """Append an event and renormalize."""
        self._events.append(event)
        logger.debug(f"Added risk event '{event.description}'",
                     extra={'operation': 'add', 'event_count': len(self._events)})
        self.normalize_probabilities()

    def remove_at(self, index: int) -> RiskEvent:
        """Remove the event at ``index`` and renormalize.

        Args:
            index: Position in the list, 0 <= index < len

        Returns:
            The removed event

        Raises:
            InvalidArgumentError: If index is out of range
        """
        self._check_index(index, 'remove')
        removed = self._events.pop(index)
        logger.debug(f"Removed risk event '{removed.description}' at {index}",
                     extra={'operation': 'remove', 'event_count': len(self._events)})
        self.normalize_probabilities()
        return removed

    def update_at(self, event: RiskEvent, index: int) -> None:
        """Replace the event at ``index`` and renormalize.

        Raises:
            InvalidArgumentError: If index is out of range
        """
        self._check_index(index, 'update')
        self._events[index] = event
        logger.debug(f"Updated risk event at {index} to '{event.description}'",
                     extra={'operation': 'update', 'event_count': len(self._events)})
        self.normalize_probabilities()

    def index_of(self, event_id: UUID) -> int:
        """Position of the event with the given id.

        Raises:
            InvalidArgumentError: If no event has this id
        """
        for index, event in enumerate(self._events):
            if event.id == event_id:
                return index
        logger.warning(f"Unknown risk event id {event_id}")
        raise InvalidArgumentError(
            f"No risk event with id {event_id}",
            argument_name='event_id',
            argument_value=str(event_id),
        )

    def normalize_probabilities(self) -> None:
        """Rescale validated probabilities so that they sum to one.

        Leaves the stored probabilities untouched when their validated
        sum is zero.
        """
        total = self.total_probability
        if total == 0:
            return

        self._events = [
            event.with_probability(event.validated_probability / total)
            for event in self._events
        ]

    def _check_index(self, index: int, operation: str) -> None:
        if not 0 <= index < len(self._events):
            valid_range = f"0..{len(self._events) - 1}" if self._events else "empty"
            logger.warning(f"Rejected {operation} at index {index} "
                           f"with {len(self._events)} events")
            raise InvalidArgumentError(
                f"Cannot {operation} risk event at index {index}: "
                f"collection has {len(self._events)} events",
                argument_name='index',
                argument_value=index,
                valid_range=valid_range,
            )

    # Statistics

    def _arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Losses and validated probabilities as arrays."""
        losses = np.array([event.possible_loss for event in self._events], dtype=float)
        weights = np.array([event.validated_probability for event in self._events], dtype=float)
        return losses, weights

    @property
    def total_probability(self) -> float:
        _, weights = self._arrays()
        return float(np.sum(weights))

    @property
    def average_loss(self) -> float:
        """Expected loss."""
        losses, weights = self._arrays()
        return float(np.sum(losses * weights))

    @property
    def variance(self) -> float:
        losses, weights = self._arrays()
        mean = float(np.sum(losses * weights))
        return float(np.sum((losses - mean) ** 2 * weights))

    @property
    def standard_deviation(self) -> float:
        return float(np.sqrt(self.variance))

    @property
    def rms_loss(self) -> float:
        """Root-mean-square loss."""
        losses, weights = self._arrays()
        return float(np.sqrt(np.sum(losses ** 2 * weights)))

    @property
    def integral_risk(self) -> float:
        """Expected loss plus RMS loss."""
        return self.average_loss + self.rms_loss

    @property
    def coefficient_of_variation(self) -> float:
        average_loss = self.average_loss
        if average_loss == 0:
            return 0.0
        return self.standard_deviation / average_loss

    @property
    def risk_level(self) -> RiskLevel:
        return classify_risk_level(
            self.coefficient_of_variation, self.low_threshold, self.high_threshold
        )

    def get_detailed_analysis(self) -> RiskAnalysis:
        """Snapshot of the current statistics."""
        return RiskAnalysis(
            total_risk_events=len(self._events),
            average_loss=self.average_loss,
            standard_deviation=self.standard_deviation,
            integral_risk=self.integral_risk,
            risk_level=self.risk_level,
            coefficient_of_variation=self.coefficient_of_variation,
        )
