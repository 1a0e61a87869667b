from __future__ import annotations

from ...constants import Defaults


class CoercionError(ValueError):
    """Raised when a text cell does not hold a floating point literal."""


def numeric_to_text(
    value: float, precision: int = Defaults.NUMERIC_TEXT_PRECISION
) -> str:
    """Render a float in fixed-point notation, e.g. ``2.5`` -> ``"2.500000"``.

    Digits beyond ``precision`` are lost; missing values render as ``"nan"``.
    """
    return f"{value:.{precision}f}"


def text_to_numeric(text: str) -> float:
    cleaned = text.strip()
    try:
        return float(cleaned)
    except ValueError as e:
        raise CoercionError(f"Cannot convert {text!r} to a number") from e
