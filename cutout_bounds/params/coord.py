"""COORD parameter handling: a named axis with a single value or a value range.

For example ``COORD=FREQ 1.4E9 1.42E9`` or ``COORD=STOKES 2``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from cutout_bounds.models import ValueRange
from cutout_bounds.params.messages import usage_fault

_NUMBER = r"\d+(?:\.\d+)?(?:E[+-]?\d+)?"
_COORD_VALUE = re.compile(rf"[A-Z_-]+ {_NUMBER}(?: {_NUMBER})?")


def validate_coord(values: Sequence[str]) -> list[str]:
    errors: list[str] = []
    for value in values:
        if not _COORD_VALUE.fullmatch(value.strip().upper()):
            errors.append(usage_fault(f"Invalid COORD value {value}"))
    return errors


def get_ranges_for_axis(
    coord_params: Sequence[str] | None, axis_name: str
) -> list[tuple[ValueRange, str]]:
    """Return the ranges requested for ``axis_name`` with their provenance fragment."""

    ranges: list[tuple[ValueRange, str]] = []
    for value in coord_params or ():
        parts = value.split()
        if not parts or parts[0].upper() != axis_name.upper():
            continue
        low = float(parts[1])
        high = float(parts[2]) if len(parts) > 2 else low
        ranges.append((ValueRange(low, high), f"COORD={value}"))
    return ranges


__all__ = ["get_ranges_for_axis", "validate_coord"]
