"""Tests for parsing user-entered event fields."""

import pytest

from riskcheck.core.exceptions import ParseError
from riskcheck.core.validation import (
    parse_loss, parse_probability_percent, validate_event_form, build_event
)


class TestParsing:
    """Test numeric field parsing."""

    @pytest.mark.parametrize("text, expected", [
        ("50000", 50000.0),
        (" 1250.5 ", 1250.5),
        ("0", 0.0),
    ])
    def test_parse_loss(self, text, expected):
        assert parse_loss(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "12,000", "inf", "nan"])
    def test_parse_loss_rejects(self, text):
        with pytest.raises(ParseError) as exc_info:
            parse_loss(text)
        assert exc_info.value.context['field_name'] == 'possible_loss'

    @pytest.mark.parametrize("text, expected", [
        (" 12.5 ", 0.125),
        ("0", 0.0),
        ("100", 1.0),
        ("50", 0.5),
    ])
    def test_parse_probability_percent(self, text, expected):
        assert parse_probability_percent(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "abc", "150", "-1", "nan"])
    def test_parse_probability_rejects(self, text):
        with pytest.raises(ParseError) as exc_info:
            parse_probability_percent(text)
        assert exc_info.value.context['field_name'] == 'probability'


class TestEventForm:
    """Test form validation and event construction."""

    def test_valid_form(self):
        is_valid, errors = validate_event_form("Flood", "1000", "10")
        assert is_valid
        assert errors == []

    def test_collects_all_errors(self):
        is_valid, errors = validate_event_form("  ", "x", "200")
        assert not is_valid
        assert len(errors) == 3
        assert errors[0] == "Description is required"

    def test_build_event(self):
        event = build_event("  Data breach \n", " 100000 ", "10")
        assert event.description == "Data breach"
        assert event.possible_loss == 100000.0
        assert event.probability == pytest.approx(0.1)

    def test_build_event_raises_with_errors(self):
        with pytest.raises(ParseError) as exc_info:
            build_event("Flood", "lots", "10")
        assert exc_info.value.context['errors'] == ["Possible loss 'lots' is not a number"]
