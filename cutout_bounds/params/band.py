"""BAND parameter validation and conversion of wavelength bands to frequency ranges."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence

import numpy as np
from astropy import units as u

from cutout_bounds.models import ValueRange
from cutout_bounds.params.messages import usage_fault

NEGATIVE_INFINITY = "-Inf"
POSITIVE_INFINITY = "+Inf"

# Lower bound used for open-ended ranges in frequency space.
MIN_FREQ_VALUE = 0.000000001
MAX_FREQ_VALUE = sys.float_info.max

_NUMBER = r"\d+(?:\.\d+)?(?:e[+-]?\d+)?"
_LOWER_BOUND = re.compile(rf"-Inf|{_NUMBER}")
_UPPER_BOUND = re.compile(rf"\+Inf|{_NUMBER}")

ERROR_MESSAGE_NOT_TWO_VALUES = usage_fault(
    "Your query contained an invalid band format. This query accepts exactly two band values"
)


def _param_value(value: str) -> float | None:
    """Return the wavelength for a bound, or ``None`` for an open bound."""

    if not value.strip() or value in (NEGATIVE_INFINITY, POSITIVE_INFINITY):
        return None
    return float(value)


def validate_band(values: Sequence[str]) -> list[str]:
    """Validate BAND values, each a ``min max`` wavelength interval in metres."""

    errors: list[str] = []
    for value in values:
        bounds = value.split()
        if len(bounds) != 2:
            errors.append(ERROR_MESSAGE_NOT_TWO_VALUES)
            continue
        low, high = bounds
        if not _LOWER_BOUND.fullmatch(low) or not _UPPER_BOUND.fullmatch(high):
            errors.append(usage_fault(f"Invalid BAND value {value}"))
            continue
        low_value, high_value = _param_value(low), _param_value(high)
        if low_value is not None and high_value is not None and low_value > high_value:
            errors.append(usage_fault(f"Invalid BAND value {value}"))
    return errors


def wavelength_to_frequency(wavelength_m: float | None) -> float | None:
    """Convert a vacuum wavelength in metres to a frequency in Hz."""

    if wavelength_m is None:
        return None
    with np.errstate(divide="ignore"):
        frequency = (np.float64(wavelength_m) * u.m).to_value(u.Hz, equivalencies=u.spectral())
    return float(frequency)


def get_freq_ranges(band_params: Sequence[str] | None) -> list[ValueRange]:
    """Convert BAND wavelength intervals into frequency ranges.

    The shortest wavelength bounds the highest frequency, so the ends swap. A single
    value selects one frequency; open ends widen to ``MIN_FREQ_VALUE`` / ``MAX_FREQ_VALUE``.
    """

    ranges: list[ValueRange] = []
    for band in band_params or ():
        wavelengths = band.split()
        if not wavelengths:
            continue
        min_freq = wavelength_to_frequency(_param_value(wavelengths[-1]))
        max_freq = wavelength_to_frequency(_param_value(wavelengths[0]))
        ranges.append(
            ValueRange(
                MIN_FREQ_VALUE if min_freq is None else min_freq,
                MAX_FREQ_VALUE if max_freq is None else max_freq,
            )
        )
    return ranges


__all__ = [
    "ERROR_MESSAGE_NOT_TWO_VALUES",
    "MAX_FREQ_VALUE",
    "MIN_FREQ_VALUE",
    "get_freq_ranges",
    "validate_band",
    "wavelength_to_frequency",
]
