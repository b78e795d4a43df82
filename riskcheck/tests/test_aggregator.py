"""Tests for the risk aggregator.

Covers renormalization, the derived statistics, risk level boundaries and
the index contract of the mutating operations.
"""

import math
import pytest
from pydantic import ValidationError

from riskcheck.core.aggregator import RiskAggregator, classify_risk_level
from riskcheck.core.data_models import RiskEvent, RiskLevel, RiskAnalysis
from riskcheck.core.exceptions import InvalidArgumentError


def make_event(loss: float, probability: float, description: str = "event") -> RiskEvent:
    return RiskEvent(description=description, possible_loss=loss, probability=probability)


class TestRiskEvent:
    """Test the event model."""

    @pytest.mark.parametrize("raw, expected", [
        (-0.5, 0.0),
        (0.0, 0.0),
        (0.3, 0.3),
        (1.0, 1.0),
        (1.7, 1.0),
    ])
    def test_validated_probability_is_clamped(self, raw, expected):
        event = make_event(100, raw)
        assert event.validated_probability == expected
        assert event.probability == raw

    @pytest.mark.parametrize("field", ["possible_loss", "probability"])
    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_values_rejected(self, field, value):
        data = {"description": "x", "possible_loss": 100.0, "probability": 0.5}
        data[field] = value
        with pytest.raises(ValidationError):
            RiskEvent(**data)

    def test_nan_probability_copy_validates_to_zero(self):
        event = make_event(100, 0.4).with_probability(math.nan)
        assert event.validated_probability == 0.0

        aggregator = RiskAggregator([event, make_event(200, 0.5)])
        aggregator.add(make_event(300, 0.5))
        probabilities = [e.probability for e in aggregator.events]
        assert all(0.0 <= p <= 1.0 for p in probabilities)
        assert sum(probabilities) == pytest.approx(1.0)

    def test_ids_are_unique(self):
        assert make_event(1, 0.1).id != make_event(1, 0.1).id

    def test_with_probability_keeps_id(self):
        event = make_event(100, 0.4, "Flood")
        copy = event.with_probability(0.8)
        assert copy.id == event.id
        assert copy.description == "Flood"
        assert copy.probability == 0.8
        assert event.probability == 0.4


class TestSeedEvents:
    """Test the example events a new aggregator starts with."""

    def test_default_construction_seeds_six_events(self):
        aggregator = RiskAggregator()
        descriptions = [event.description for event in aggregator.events]
        assert descriptions == [
            "Equipment failure",
            "Data breach",
            "Natural disaster",
            "Employee injury",
            "Supply chain disruption",
            "Everything will be fine",
        ]
        assert aggregator.total_probability == pytest.approx(1.0)

    def test_seed_statistics(self):
        aggregator = RiskAggregator()
        # 7500 + 10000 + 10000 + 6000 + 9600 + 0
        assert aggregator.average_loss == pytest.approx(43100.0)
        assert aggregator.risk_level == RiskLevel.HIGH

    def test_explicit_empty_list_is_not_seeded(self):
        assert len(RiskAggregator([])) == 0

    def test_explicit_events_stored_as_given(self):
        events = [make_event(100, 0.2), make_event(200, 0.2)]
        aggregator = RiskAggregator(events)
        assert [event.probability for event in aggregator.events] == [0.2, 0.2]


class TestRenormalization:
    """Test probability renormalization after mutations."""

    @pytest.fixture
    def aggregator(self):
        return RiskAggregator([
            make_event(100, 0.5, "a"),
            make_event(300, 0.5, "b"),
            make_event(50, 0.25, "c"),
        ])

    def test_add_normalizes_to_one(self, aggregator):
        aggregator.add(make_event(1000, 0.9, "d"))
        assert aggregator.total_probability == pytest.approx(1.0)
        assert aggregator.events[-1].description == "d"

    def test_remove_normalizes_to_one(self, aggregator):
        aggregator.remove_at(0)
        assert len(aggregator) == 2
        assert aggregator.total_probability == pytest.approx(1.0)

    def test_update_normalizes_to_one(self, aggregator):
        aggregator.update_at(make_event(10, 0.1, "new"), 1)
        assert aggregator.events[1].description == "new"
        assert aggregator.total_probability == pytest.approx(1.0)

    def test_normalization_is_proportional(self):
        aggregator = RiskAggregator([make_event(1, 0.2), make_event(2, 0.6)])
        aggregator.normalize_probabilities()
        probabilities = [event.probability for event in aggregator.events]
        assert probabilities == pytest.approx([0.25, 0.75])

    def test_normalization_clamps_out_of_range_values(self):
        aggregator = RiskAggregator([make_event(1, -0.4), make_event(2, 3.0)])
        aggregator.normalize_probabilities()
        probabilities = [event.probability for event in aggregator.events]
        assert probabilities == pytest.approx([0.0, 1.0])

    def test_normalization_is_idempotent(self, aggregator):
        aggregator.normalize_probabilities()
        once = [event.probability for event in aggregator.events]
        aggregator.normalize_probabilities()
        twice = [event.probability for event in aggregator.events]
        assert twice == pytest.approx(once)

    def test_normalization_replaces_stored_probabilities(self, aggregator):
        aggregator.add(make_event(10, 0.75))
        assert aggregator.events[0].probability == pytest.approx(0.25)

    def test_normalization_preserves_ids(self, aggregator):
        ids = [event.id for event in aggregator.events]
        aggregator.normalize_probabilities()
        assert [event.id for event in aggregator.events] == ids

    def test_all_zero_probabilities_left_untouched(self):
        aggregator = RiskAggregator([make_event(100, 0.0), make_event(200, 0.0)])
        aggregator.add(make_event(300, 0.0))
        assert aggregator.total_probability == 0
        assert [event.probability for event in aggregator.events] == [0.0, 0.0, 0.0]

    def test_negative_only_probabilities_left_untouched(self):
        aggregator = RiskAggregator([make_event(100, -0.2)])
        aggregator.add(make_event(200, -0.5))
        assert [event.probability for event in aggregator.events] == [-0.2, -0.5]


class TestIndexContract:
    """Test that out-of-range indices are rejected without mutation."""

    @pytest.fixture
    def aggregator(self):
        return RiskAggregator([
            make_event(100, 0.2, "a"),
            make_event(200, 0.3, "b"),
            make_event(300, 0.5, "c"),
        ])

    @pytest.mark.parametrize("index", [3, 10, -1])
    def test_remove_out_of_range(self, aggregator, index):
        before = aggregator.events
        with pytest.raises(InvalidArgumentError) as exc_info:
            aggregator.remove_at(index)
        assert aggregator.events == before
        assert exc_info.value.context['argument_value'] == index
        assert exc_info.value.context['valid_range'] == "0..2"

    @pytest.mark.parametrize("index", [3, 10, -1])
    def test_update_out_of_range(self, aggregator, index):
        before = aggregator.events
        with pytest.raises(InvalidArgumentError):
            aggregator.update_at(make_event(1, 1.0), index)
        assert aggregator.events == before

    def test_remove_from_empty(self):
        aggregator = RiskAggregator([])
        with pytest.raises(InvalidArgumentError) as exc_info:
            aggregator.remove_at(0)
        assert exc_info.value.context['valid_range'] == "empty"

    def test_remove_returns_removed_event(self, aggregator):
        removed = aggregator.remove_at(1)
        assert removed.description == "b"
        assert [event.description for event in aggregator.events] == ["a", "c"]

    def test_event_at(self, aggregator):
        assert aggregator.event_at(2).description == "c"
        with pytest.raises(InvalidArgumentError):
            aggregator.event_at(3)

    def test_index_of(self, aggregator):
        target = aggregator.events[1]
        assert aggregator.index_of(target.id) == 1

    def test_index_of_unknown_id(self, aggregator):
        with pytest.raises(InvalidArgumentError):
            aggregator.index_of(make_event(1, 1).id)

    def test_events_accessor_returns_copy(self, aggregator):
        events = aggregator.events
        events.clear()
        assert len(aggregator) == 3


class TestStatistics:
    """Test derived statistics."""

    @pytest.fixture
    def two_events(self):
        return RiskAggregator([make_event(100, 0.5), make_event(300, 0.5)])

    def test_two_event_scenario(self, two_events):
        assert two_events.total_probability == pytest.approx(1.0)
        assert two_events.average_loss == pytest.approx(200.0)
        assert two_events.variance == pytest.approx(10000.0)
        assert two_events.standard_deviation == pytest.approx(100.0)
        assert two_events.rms_loss == pytest.approx(math.sqrt(50000))
        assert two_events.integral_risk == pytest.approx(200 + math.sqrt(50000))
        assert two_events.integral_risk == pytest.approx(423.6, abs=0.1)
        assert two_events.coefficient_of_variation == pytest.approx(0.5)
        assert two_events.risk_level == RiskLevel.MEDIUM

    def test_statistics_use_clamped_probabilities(self):
        aggregator = RiskAggregator([make_event(100, 2.0), make_event(500, -1.0)])
        assert aggregator.total_probability == pytest.approx(1.0)
        assert aggregator.average_loss == pytest.approx(100.0)
        assert aggregator.variance == pytest.approx(0.0)

    def test_cv_zero_when_average_loss_zero(self):
        aggregator = RiskAggregator([make_event(0, 0.5), make_event(0, 0.5)])
        assert aggregator.average_loss == 0
        assert aggregator.coefficient_of_variation == 0

    def test_cv_zero_when_average_loss_zero_despite_variance(self):
        # Losses cancel out in the mean but not in the variance
        aggregator = RiskAggregator([make_event(-100, 0.5), make_event(100, 0.5)])
        assert aggregator.average_loss == pytest.approx(0.0)
        assert aggregator.variance == pytest.approx(10000.0)
        assert aggregator.coefficient_of_variation == 0

    def test_empty_collection(self):
        aggregator = RiskAggregator([])
        assert aggregator.total_probability == 0
        assert aggregator.average_loss == 0
        assert aggregator.variance == 0
        assert aggregator.standard_deviation == 0
        assert aggregator.rms_loss == 0
        assert aggregator.integral_risk == 0
        assert aggregator.coefficient_of_variation == 0
        assert aggregator.risk_level == RiskLevel.LOW

    def test_single_certain_event_is_low_risk(self):
        aggregator = RiskAggregator([make_event(1000, 1.0)])
        assert aggregator.standard_deviation == 0
        assert aggregator.rms_loss == pytest.approx(1000.0)
        assert aggregator.integral_risk == pytest.approx(2000.0)
        assert aggregator.risk_level == RiskLevel.LOW

    def test_statistics_are_python_floats(self, two_events):
        assert type(two_events.average_loss) is float
        assert type(two_events.rms_loss) is float


class TestRiskLevel:
    """Test risk level classification."""

    @pytest.mark.parametrize("cv, expected", [
        (0.0, RiskLevel.LOW),
        (0.24999, RiskLevel.LOW),
        (0.25, RiskLevel.MEDIUM),
        (0.5, RiskLevel.MEDIUM),
        (0.74999, RiskLevel.MEDIUM),
        (0.75, RiskLevel.HIGH),
        (3.0, RiskLevel.HIGH),
    ])
    def test_boundaries(self, cv, expected):
        assert classify_risk_level(cv) == expected

    def test_custom_thresholds(self):
        assert classify_risk_level(0.3, low_threshold=0.4, high_threshold=0.9) == RiskLevel.LOW
        assert classify_risk_level(0.9, low_threshold=0.4, high_threshold=0.9) == RiskLevel.HIGH

    def test_aggregator_uses_its_thresholds(self):
        aggregator = RiskAggregator(
            [make_event(100, 0.5), make_event(300, 0.5)],
            low_threshold=0.6,
            high_threshold=0.8,
        )
        assert aggregator.risk_level == RiskLevel.LOW

    def test_display_values(self):
        assert RiskLevel.LOW.value == "Low Risk"
        assert RiskLevel.MEDIUM.value == "Medium Risk"
        assert RiskLevel.HIGH.value == "High Risk"


class TestDetailedAnalysis:
    """Test the analysis snapshot."""

    def test_snapshot_contents(self):
        aggregator = RiskAggregator([make_event(100, 0.5), make_event(300, 0.5)])
        analysis = aggregator.get_detailed_analysis()

        assert isinstance(analysis, RiskAnalysis)
        assert analysis.total_risk_events == 2
        assert analysis.average_loss == pytest.approx(200.0)
        assert analysis.standard_deviation == pytest.approx(100.0)
        assert analysis.integral_risk == pytest.approx(200 + math.sqrt(50000))
        assert analysis.risk_level == RiskLevel.MEDIUM
        assert analysis.coefficient_of_variation == pytest.approx(0.5)

    def test_snapshot_has_no_side_effects(self):
        aggregator = RiskAggregator([make_event(100, 0.2), make_event(300, 0.2)])
        aggregator.get_detailed_analysis()
        assert [event.probability for event in aggregator.events] == [0.2, 0.2]

    def test_snapshot_does_not_follow_later_changes(self):
        aggregator = RiskAggregator([make_event(100, 0.5), make_event(300, 0.5)])
        analysis = aggregator.get_detailed_analysis()
        aggregator.add(make_event(1000, 0.5))
        assert analysis.total_risk_events == 2
