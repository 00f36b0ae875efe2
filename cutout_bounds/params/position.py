"""Validators for the positional parameters: POS, CIRCLE and POLYGON."""

from __future__ import annotations

import re
from collections.abc import Sequence

from cutout_bounds.params.messages import usage_fault

NEGATIVE_INFINITY = "-Inf"
POSITIVE_INFINITY = "+Inf"

_SIGNED_DECIMAL = r"[+-]?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?"
_RANGE_LOW = rf"(?:-Inf|{_SIGNED_DECIMAL})"
_RANGE_HIGH = rf"(?:\+Inf|{_SIGNED_DECIMAL})"
_RANGE_PAIR = rf"{_RANGE_LOW} +{_RANGE_HIGH}"

_CIRCLE_VALUE = re.compile(rf"(?:{_SIGNED_DECIMAL} +){{2}}{_SIGNED_DECIMAL}")
_VERTEX = rf"{_SIGNED_DECIMAL} +{_SIGNED_DECIMAL}"
_POLYGON_VALUE = re.compile(rf"{_VERTEX}(?: +{_VERTEX}){{2,}}")

_POS_CIRCLE = re.compile(rf"CIRCLE(?: +{_SIGNED_DECIMAL}){{3}}")
_POS_RANGE = re.compile(rf"RANGE(?: +{_RANGE_PAIR}){{2}}")
_POS_POLYGON = re.compile(rf"POLYGON(?: +{_VERTEX}){{3,}}")

MAX_LONGITUDE = 360.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MAX_RADIUS = 10.0

LONGITUDE_ERROR = usage_fault("Invalid longitude value. Valid range is [0,360]")
LATITUDE_ERROR = usage_fault("Invalid latitude value. Valid range is [-90,90]")
RADIUS_ERROR = usage_fault("Invalid radius value. Valid range is [0,10]")


def _is_open(value: str) -> bool:
    return value in (NEGATIVE_INFINITY, POSITIVE_INFINITY)


def _in_range(value: str, low: float, high: float) -> bool:
    try:
        number = float(value)
    except ValueError:
        return False
    return low <= number <= high


def verify_longitude(value: str, *, optional: bool = False) -> str | None:
    if optional and _is_open(value):
        return None
    return None if _in_range(value, 0.0, MAX_LONGITUDE) else LONGITUDE_ERROR


def verify_latitude(value: str, *, optional: bool = False) -> str | None:
    if optional and _is_open(value):
        return None
    return None if _in_range(value, MIN_LATITUDE, MAX_LATITUDE) else LATITUDE_ERROR


def verify_radius(value: str) -> str | None:
    return None if _in_range(value, 0.0, MAX_RADIUS) else RADIUS_ERROR


def _first_error(*errors: str | None) -> str | None:
    return next((error for error in errors if error), None)


def check_circle(parts: Sequence[str]) -> str | None:
    """Check ``ra dec radius`` tokens, returning the first range violation."""

    ra, dec, radius = parts
    if error := verify_longitude(ra):
        return error
    if error := verify_latitude(dec):
        return error
    return verify_radius(radius)


def check_polygon(parts: Sequence[str]) -> str | None:
    for index in range(0, len(parts), 2):
        error = _first_error(verify_longitude(parts[index]), verify_latitude(parts[index + 1]))
        if error:
            return error
    return None


def check_range(parts: Sequence[str]) -> str | None:
    ra_low, ra_high, dec_low, dec_high = parts
    return _first_error(
        verify_longitude(ra_low, optional=True),
        verify_longitude(ra_high, optional=True),
        verify_latitude(dec_low, optional=True),
        verify_latitude(dec_high, optional=True),
    )


def validate_circle(values: Sequence[str]) -> list[str]:
    """Validate CIRCLE values of the form ``ra dec radius``."""

    errors: list[str] = []
    for value in values:
        candidate = value.strip()
        if not _CIRCLE_VALUE.fullmatch(candidate):
            errors.append(usage_fault(f"Invalid CIRCLE value {candidate}"))
            continue
        if error := check_circle(candidate.split()):
            errors.append(error)
    return errors


def validate_polygon(values: Sequence[str]) -> list[str]:
    """Validate POLYGON values: at least three ``lon lat`` vertices."""

    errors: list[str] = []
    for value in values:
        candidate = value.strip()
        if not _POLYGON_VALUE.fullmatch(candidate):
            errors.append(usage_fault(f"Invalid POLYGON value {candidate}"))
            continue
        if error := check_polygon(candidate.split()):
            errors.append(error)
    return errors


def validate_pos(values: Sequence[str]) -> list[str]:
    """Validate POS values carrying a CIRCLE, RANGE or POLYGON shape keyword."""

    errors: list[str] = []
    for value in values:
        candidate = value.strip()
        parts = candidate.split()
        if _POS_CIRCLE.fullmatch(candidate):
            error = check_circle(parts[1:])
        elif _POS_RANGE.fullmatch(candidate):
            error = check_range(parts[1:])
        elif _POS_POLYGON.fullmatch(candidate):
            error = check_polygon(parts[1:])
        else:
            error = usage_fault(f"Invalid POS value {candidate}")
        if error:
            errors.append(error)
    return errors


__all__ = [
    "LATITUDE_ERROR",
    "LONGITUDE_ERROR",
    "NEGATIVE_INFINITY",
    "POSITIVE_INFINITY",
    "RADIUS_ERROR",
    "validate_circle",
    "validate_polygon",
    "validate_pos",
    "verify_latitude",
    "verify_longitude",
    "verify_radius",
]
