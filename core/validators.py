# core/validators.py

"""
Pure field validators and input parsers shared by the roster, the persistence layer, and the CLI.

Predicates never raise and have no side effects. Parsers return None instead of raising when
the input is blank, malformed, or outside the requested range.
"""

# must never import from models!

import math

MIN_GPA = 0.0
MAX_GPA = 4.0


# === predicates ===


def is_valid_gpa(gpa: float) -> bool:
    # NaN compares False against both bounds
    return MIN_GPA <= gpa <= MAX_GPA


def is_non_blank(text: str | None) -> bool:
    return text is not None and text.strip() != ""


# === parsers ===


def parse_float(text: str | None) -> float | None:
    """
    Parses a string into a finite float.

    Args:
        text (str | None): The raw input.

    Returns:
        The parsed value, or None if the input is blank, not a number, or not finite.
    """
    if not is_non_blank(text):
        return None

    try:
        value = float(text.strip())
    except ValueError:
        return None

    return value if math.isfinite(value) else None


def parse_float_in_range(text: str | None, low: float, high: float) -> float | None:
    value = parse_float(text)

    if value is not None and low <= value <= high:
        return value

    return None


def parse_int(text: str | None) -> int | None:
    if not is_non_blank(text):
        return None

    try:
        return int(text.strip())
    except ValueError:
        return None


def parse_int_in_range(text: str | None, low: int, high: int) -> int | None:
    value = parse_int(text)

    if value is not None and low <= value <= high:
        return value

    return None
