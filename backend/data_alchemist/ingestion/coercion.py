"""Cell coercion — turn raw spreadsheet cells into the typed shapes the records expect.

Cells arrive already decoded from CSV/XLSX: strings, numbers, or None.
"""

import json
import math
import re
from typing import Any, Optional

from data_alchemist.validators.reference_data import MAX_PHASE_SPAN

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float) and value != value:
        # NaN from an empty spreadsheet cell
        return True
    return False


def _bracketed_json(text: str) -> Optional[list]:
    """Parse '[...]' text as a JSON list, or None if it is not one."""
    if not (text.startswith("[") and text.endswith("]")):
        return None
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, list) else None


def parse_int(value: Any) -> Optional[int]:
    """Leading-integer parse: 3 → 3, '4.7' → 4, '2 units' → 2, 'abc' → None."""
    if _is_empty(value) or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def parse_int_or_default(value: Any, default: int = 1) -> int:
    parsed = parse_int(value)
    return default if parsed is None else parsed


def parse_string_array(value: Any) -> list[str]:
    """'a, b,c' / '["a","b"]' / ['a','b'] → ['a', 'b', 'c'] style lists."""
    if _is_empty(value):
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]

    text = str(value).strip()
    parsed = _bracketed_json(text)
    if parsed is not None:
        return [str(v) for v in parsed]

    return [part.strip() for part in text.split(",") if part.strip()]


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def parse_number_array(value: Any) -> list:
    """'1,2,3' / '[1,2]' / [1, 2] → list of numbers.

    The comma form drops pieces that are not positive integers; the list and
    JSON forms keep every numeric element so the engine can report bad ones.
    """
    if _is_empty(value):
        return []
    if isinstance(value, (list, tuple)):
        return [n for n in (_to_number(v) for v in value) if n is not None]

    text = str(value).strip()
    parsed = _bracketed_json(text)
    if parsed is not None:
        return [n for n in (_to_number(v) for v in parsed) if n is not None]

    numbers = (parse_int(part) for part in text.split(","))
    return [n for n in numbers if n is not None and n > 0]


def parse_phases(value: Any) -> list:
    """Like parse_number_array, plus inclusive ranges: '2-4' → [2, 3, 4].

    A range spanning more than MAX_PHASE_SPAN phases is not expanded.
    """
    if _is_empty(value):
        return []

    if isinstance(value, str) and "-" in value:
        bounds = [piece.strip() for piece in value.strip().split("-")]
        if len(bounds) >= 2 and bounds[0] and bounds[1]:
            start, end = parse_int(bounds[0]), parse_int(bounds[1])
            if start is not None and end is not None and end - start < MAX_PHASE_SPAN:
                return list(range(start, end + 1))

    return parse_number_array(value)


def parse_text(value: Any, default: str = "") -> str:
    """Cell as trimmed text; numbers keep their integer form ('7' not '7.0')."""
    if _is_empty(value):
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
