from __future__ import annotations

import pytest

from cutout_bounds.params.band import (
    ERROR_MESSAGE_NOT_TWO_VALUES,
    MAX_FREQ_VALUE,
    MIN_FREQ_VALUE,
    get_freq_ranges,
    validate_band,
    wavelength_to_frequency,
)


@pytest.mark.parametrize(
    "value",
    ["300 600", "300 +Inf", "-Inf 600", "-Inf +Inf", "3.5e-1 4e-1", "3.5e-1   4e-1"],
)
def test_validate_band_accepts_values(value: str) -> None:
    assert validate_band([value]) == []


@pytest.mark.parametrize(
    "value",
    [
        "a 600",
        "300 NaN",
        "NaN 600",
        "+Inf 600",
        "300 -Inf",
        "+Inf -Inf",
        "-inf 600",
        "300 +inf",
        "inf 600",
        "2.3e 600",
        "2.3 e-5",
        "600 300",
    ],
)
def test_validate_band_rejects_bad_bounds(value: str) -> None:
    assert validate_band([value]) == [f"UsageFault: Invalid BAND value {value}"]


@pytest.mark.parametrize(
    "value",
    ["300", "0.21", "3.5e-1", " 0.21 ", "", "0.21 0.35 0.56", "300\\600", "300//", "2.3-01", "2."],
)
def test_validate_band_requires_two_values(value: str) -> None:
    assert validate_band([value]) == [ERROR_MESSAGE_NOT_TWO_VALUES]
    assert ERROR_MESSAGE_NOT_TWO_VALUES.startswith("UsageFault: ")


def test_get_freq_ranges_converts_wavelengths() -> None:
    (freq_range,) = get_freq_ranges(["0.205 0.215"])

    assert freq_range.min_value == pytest.approx(1.3943835255813954e9)
    assert freq_range.max_value == pytest.approx(1.4624022341463416e9)


def test_get_freq_ranges_open_bounds() -> None:
    (open_low,) = get_freq_ranges(["-Inf 0.215"])
    assert open_low.min_value == pytest.approx(1.3943835255813954e9)
    assert open_low.max_value == MAX_FREQ_VALUE

    (open_high,) = get_freq_ranges(["0.215 +Inf"])
    assert open_high.min_value == MIN_FREQ_VALUE
    assert open_high.max_value == pytest.approx(1.3943835255813954e9)


def test_get_freq_ranges_multiple_and_single_values() -> None:
    ranges = get_freq_ranges(["0.205 0.215", "0.13"])

    assert len(ranges) == 2
    assert ranges[1].min_value == pytest.approx(2.306095830769231e9)
    assert ranges[1].max_value == ranges[1].min_value
    assert get_freq_ranges(None) == []


def test_wavelength_to_frequency() -> None:
    assert wavelength_to_frequency(None) is None
    assert wavelength_to_frequency(299792458.0) == pytest.approx(1.0)
