"""Internal utilities for quickfuzzy."""

import math
from typing import Union

from quickfuzzy.enums import Mode
from quickfuzzy.exceptions import ValidationError

VALID_MODES = frozenset(m.value for m in Mode)


def normalize_mode(mode: Union[str, Mode]) -> Mode:
    """Convert a mode name to the Mode enum, validating string names.

    Args:
        mode: Either a Mode enum value or a string mode name.

    Returns:
        The matching Mode member.

    Raises:
        ValidationError: If the mode name is not recognized.
        TypeError: If mode is not a string or Mode enum.

    Example:
        >>> normalize_mode("Static")
        <Mode.STATIC: 'static'>
    """
    if isinstance(mode, Mode):
        return mode

    if isinstance(mode, str):
        mode_lower = mode.lower()
        if mode_lower in VALID_MODES:
            return Mode(mode_lower)
        raise ValidationError(
            f"Unknown mode: '{mode}'. Valid options: {sorted(VALID_MODES)}"
        )

    raise TypeError(f"mode must be str or Mode enum, got {type(mode).__name__}")


def check_non_negative(name: str, value) -> None:
    """Reject negative, non-finite or non-numeric option values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{name} must be a non-negative finite number, got {value}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (not banker's rounding)."""
    return math.floor(value + 0.5)


__all__ = ["normalize_mode", "check_non_negative", "round_half_up", "VALID_MODES"]
