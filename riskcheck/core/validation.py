"""Parsing and validation of user-entered event fields.

Front-ends collect the description, loss and probability as text. These
helpers turn that text into numbers, converting the probability from a
percentage, and report problems as messages the form can show.
"""

import math
from typing import List, Tuple

from .data_models import RiskEvent
from .exceptions import ParseError


def parse_loss(text: str) -> float:
    """Parse a possible loss amount.

    Args:
        text: Amount as typed, e.g. " 50000 "

    Returns:
        Loss as float

    Raises:
        ParseError: If the text is empty or not a number
    """
    stripped = (text or "").strip()
    if not stripped:
        raise ParseError("Possible loss is required", field_name='possible_loss', raw_value=text)
    try:
        loss = float(stripped)
    except ValueError as e:
        raise ParseError(
            f"Possible loss '{stripped}' is not a number",
            field_name='possible_loss',
            raw_value=text,
            cause=e,
        )
    if not math.isfinite(loss):
        raise ParseError(
            f"Possible loss '{stripped}' must be a finite amount",
            field_name='possible_loss',
            raw_value=text,
        )
    return loss


def parse_probability_percent(text: str) -> float:
    """Parse a probability entered as a percentage.

    Args:
        text: Percentage as typed, between 0 and 100

    Returns:
        Probability as a fraction (percentage / 100)

    Raises:
        ParseError: If the text is empty, not a number or outside [0, 100]
    """
    stripped = (text or "").strip()
    if not stripped:
        raise ParseError("Probability is required", field_name='probability', raw_value=text)
    try:
        percent = float(stripped)
    except ValueError as e:
        raise ParseError(
            f"Probability '{stripped}' is not a number",
            field_name='probability',
            raw_value=text,
            cause=e,
        )
    if not 0 <= percent <= 100:
        raise ParseError(
            f"Probability {percent}% must be between 0 and 100",
            field_name='probability',
            raw_value=text,
        )
    return percent / 100


def validate_event_form(description: str,
                        loss_text: str,
                        probability_text: str) -> Tuple[bool, List[str]]:
    """Check form fields without raising.

    Returns:
        Tuple of (is_valid, errors)
    """
    errors = []

    if not (description or "").strip():
        errors.append("Description is required")

    for parser, text in ((parse_loss, loss_text), (parse_probability_percent, probability_text)):
        try:
            parser(text)
        except ParseError as e:
            errors.append(e.message)

    return len(errors) == 0, errors


def build_event(description: str, loss_text: str, probability_text: str) -> RiskEvent:
    """Create a RiskEvent from form text.

    Raises:
        ParseError: If any field is invalid
    """
    is_valid, errors = validate_event_form(description, loss_text, probability_text)
    if not is_valid:
        raise ParseError("; ".join(errors), context={'errors': errors})

    return RiskEvent(
        description=description.strip(),
        possible_loss=parse_loss(loss_text),
        probability=parse_probability_percent(probability_text),
    )
