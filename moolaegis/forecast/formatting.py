"""Number presentation helpers shared by the API and the PDF renderer."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Optional

PLACEHOLDER = "—"


class RoundingMode(str, Enum):
    ROUND = "round"
    CEIL = "ceil"
    FLOOR = "floor"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _apply_mode(value: float, decimals: int, mode: RoundingMode) -> float:
    factor = 10**decimals
    if mode == RoundingMode.CEIL:
        return math.ceil(value * factor) / factor
    if mode == RoundingMode.FLOOR:
        return math.floor(value * factor) / factor
    # Half-up, so -2.5 rounds to -2 and 2.5 to 3
    return math.floor(value * factor + 0.5) / factor


def format_number(value: Any, decimals: int = 0, mode: RoundingMode | str = RoundingMode.ROUND) -> str:
    """Format with en-US thousands separators and exactly ``decimals`` fraction digits.

    Anything that is not a finite number renders as an em dash placeholder.
    """
    if not _is_number(value):
        return PLACEHOLDER
    decimals = max(0, int(decimals))
    v = _apply_mode(float(value), decimals, RoundingMode(mode))
    if v == 0:
        v = 0.0
    return f"{v:,.{decimals}f}"


def format_parens(value: Any, decimals: int = 0, mode: RoundingMode | str = RoundingMode.ROUND) -> str:
    """Like ``format_number`` but negatives are shown in accounting parentheses."""
    if not _is_number(value):
        return PLACEHOLDER
    if value < 0:
        return f"({format_number(abs(value), decimals, mode)})"
    return format_number(value, decimals, mode)


def _parse(raw: Any) -> Optional[float]:
    if _is_number(raw):
        return float(raw)
    if not isinstance(raw, str):
        return None
    text = raw.replace(",", "").strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_number(raw: Any) -> float:
    """Parse user input that may carry thousands separators. Invalid input is 0."""
    number = _parse(raw)
    return 0.0 if number is None else number


def format_with_commas(raw: Any) -> str:
    """Re-format free-form numeric input with separators and up to three decimals."""
    number = _parse(raw)
    if number is None:
        return ""
    text = f"{round(number, 3):,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_percent(ratio: Optional[float], digits: int = 1) -> str:
    """Render a fraction as a percentage, ``None`` as ``N/A``."""
    if ratio is None or not _is_number(ratio):
        return "N/A"
    return f"{ratio * 100:.{digits}f}%"
