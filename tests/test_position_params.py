from __future__ import annotations

import pytest

from cutout_bounds.params.position import (
    LATITUDE_ERROR,
    LONGITUDE_ERROR,
    RADIUS_ERROR,
    validate_circle,
    validate_polygon,
    validate_pos,
)


@pytest.mark.parametrize(
    "values",
    [
        ["12.0 34.0 0.5"],
        ["+182.5 -34.0 7.5"],
        ["1.9461733726797e02 -4.9419355920530e01 0.05"],
        ["1.9461733726797e+02 -4.9419355920530e+01 0.05"],
        ["276.7 -61.9 3.1667", "297 35 5"],
        ["0 -90 0", "360 90 10"],
    ],
)
def test_validate_circle_accepts_values(values: list[str]) -> None:
    assert validate_circle(values) == []


@pytest.mark.parametrize(
    "value",
    ["12.0 34.0 0.5 7", "+182.5 -34.0", "-Inf 34.0 0.5", "34.0 +Inf 0.5", "34.0 0.5 NaN"],
)
def test_validate_circle_rejects_malformed_values(value: str) -> None:
    assert validate_circle([value]) == [f"UsageFault: Invalid CIRCLE value {value}"]


def test_validate_circle_reports_range_violations() -> None:
    assert validate_circle(["-1.0 34.0 0.5"]) == [LONGITUDE_ERROR]
    assert validate_circle(["360.001 -34.0 1"]) == [LONGITUDE_ERROR]
    assert validate_circle(["12.0 102.0 0.5"]) == [LATITUDE_ERROR]
    assert validate_circle(["+182.5 -98.0 7.5"]) == [LATITUDE_ERROR]
    assert validate_circle(["12.0 34.0 -0.5"]) == [RADIUS_ERROR]
    assert validate_circle(["+182.5 -34.0 17.5"]) == [RADIUS_ERROR]
    assert LONGITUDE_ERROR == "UsageFault: Invalid longitude value. Valid range is [0,360]"


def test_validate_circle_collects_every_error() -> None:
    errors = validate_circle(["12.0 34.0 0.5", "-1.0 34.0 0.5", "bad", "1 2 30"])

    assert errors == [
        LONGITUDE_ERROR,
        "UsageFault: Invalid CIRCLE value bad",
        RADIUS_ERROR,
    ]


def test_validate_polygon() -> None:
    assert validate_polygon(["12.0 34.0 14.0 35.0 14.0 36.0 12.0 35.0"]) == []
    assert validate_polygon(["112.0 34.0 118.0 36 118.0 -10.0 112.0 -10.0 89.0 0"]) == []

    for value in (
        "12.0 34.0 14.0 35.0",
        "112.0 34.0 118.0 36 118.0 -10.0 112.0 -10.0 89.0",
        "12.0 34.0 14.0 35.0 NaN 17",
        "12.0 34.0 14.0 35.0 17 NaN",
    ):
        assert validate_polygon([value]) == [f"UsageFault: Invalid POLYGON value {value}"]

    assert validate_polygon(["412.0 34.0 14.0 35.0 5 5"]) == [LONGITUDE_ERROR]
    assert validate_polygon(["112.0 34.0 -0.001 36 118.0 -10.0 112.0 -10.0"]) == [
        LONGITUDE_ERROR
    ]
    assert validate_polygon(["12.0 134.0 14.0 35.0 14.0 36.0 12.0 35.0"]) == [LATITUDE_ERROR]
    assert validate_polygon(["112.0 34.0 118.0 -98 118.0 -10.0 112.0 -10.0 89.0 0"]) == [
        LATITUDE_ERROR
    ]


def test_validate_pos_shapes() -> None:
    valid = [
        "CIRCLE 12.0 34.0 0.5",
        "RANGE 12.0 12.5 34.0 36.0",
        "RANGE -Inf +Inf -Inf +Inf",
        "RANGE 0 360.0 89.0 +Inf",
        "POLYGON 12.0 34.0 14.0 35.0 14.0 36.0 12.0 35.0",
    ]
    assert validate_pos(valid) == []

    assert validate_pos(["BOX 12.0 34.0 1 1"]) == [
        "UsageFault: Invalid POS value BOX 12.0 34.0 1 1"
    ]
    assert validate_pos(["RANGE +Inf 12.5 34.0 36.0"]) == [
        "UsageFault: Invalid POS value RANGE +Inf 12.5 34.0 36.0"
    ]
    assert validate_pos(["CIRCLE 12.0 34.0 12"]) == [RADIUS_ERROR]
    assert validate_pos(["RANGE 12.0 370 34.0 36.0"]) == [LONGITUDE_ERROR]
    assert validate_pos(["POLYGON 12.0 34.0 14.0 95.0 14.0 36.0"]) == [LATITUDE_ERROR]
