"""Sky bounding boxes for validated POS, CIRCLE and POLYGON values."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from cutout_bounds.models import GeneratedFileBounds
from cutout_bounds.params.position import NEGATIVE_INFINITY, POSITIVE_INFINITY

_LOGGER = logging.getLogger(__name__)

# Replacements for open RANGE bounds: ra low, ra high, dec low, dec high.
DEFAULT_RANGE_BOUNDS = ("0", "360.0", "-90", "+90.0")
COORD_PRECISION = Decimal("0.000001")


def calc_pos_generated_file_bounds(pos_param: str) -> GeneratedFileBounds | None:
    """Return the bounds enclosing a keyword-prefixed POS value.

    Polygons straddling a celestial pole are not handled. ``None`` is returned for a
    value without a recognised shape keyword.
    """

    keyword, _, remainder = pos_param.strip().partition(" ")
    if keyword == "CIRCLE":
        return calc_circle_bounds(remainder)
    if keyword == "RANGE":
        return calc_range_bounds(remainder)
    if keyword == "POLYGON":
        return calc_polygon_bounds(remainder)
    _LOGGER.warning("Unsupported POS shape in %r", pos_param)
    return None


def calc_circle_bounds(circle_param: str) -> GeneratedFileBounds:
    """Square bounds circumscribing ``ra dec radius``; the centre tokens pass through."""

    ra, dec, radius = circle_param.split()
    return GeneratedFileBounds.square(ra, dec, float(radius) * 2.0)


def calc_range_bounds(range_param: str) -> GeneratedFileBounds:
    """Bounds for ``ra1 ra2 dec1 dec2`` with open ends clamped to the whole sky."""

    parts = range_param.split()
    if parts and parts[0] == "RANGE":
        parts = parts[1:]
    values = [
        default if part in (NEGATIVE_INFINITY, POSITIVE_INFINITY) else part
        for part, default in zip(parts, DEFAULT_RANGE_BOUNDS)
    ]
    first_ra, second_ra, first_dec, second_dec = (Decimal(value) for value in values)
    return calc_bounds_for_range(first_ra, second_ra, first_dec, second_dec)


def calc_polygon_bounds(polygon_param: str) -> GeneratedFileBounds:
    """Bounds of the axis-aligned box around every polygon vertex."""

    parts = [Decimal(value) for value in polygon_param.split()]
    ras, decs = parts[0::2], parts[1::2]
    return calc_bounds_for_range(min(ras), max(ras), min(decs), max(decs))


def calc_bounds_for_range(
    first_ra: Decimal, second_ra: Decimal, first_dec: Decimal, second_dec: Decimal
) -> GeneratedFileBounds:
    centre_ra = ((first_ra + second_ra) / 2).quantize(COORD_PRECISION, rounding=ROUND_HALF_UP)
    centre_dec = ((first_dec + second_dec) / 2).quantize(
        COORD_PRECISION, rounding=ROUND_HALF_UP
    )
    return GeneratedFileBounds.from_decimals(
        centre_ra,
        centre_dec,
        abs(first_ra - second_ra),
        abs(first_dec - second_dec),
    )


__all__ = [
    "DEFAULT_RANGE_BOUNDS",
    "calc_bounds_for_range",
    "calc_circle_bounds",
    "calc_polygon_bounds",
    "calc_pos_generated_file_bounds",
    "calc_range_bounds",
]
