from __future__ import annotations

import math

import pytest

from cutout_bounds.models import GeneratedFileBounds, ImageCubeAxis, ParamMap, ValueRange


def test_value_range_open_ends() -> None:
    assert ValueRange(-math.inf, 1.0).is_open_low()
    assert ValueRange(0.0, math.inf).is_open_high()
    assert not ValueRange(0.0, 1.0).is_open_low()
    assert ValueRange(1.0, 2.0) == ValueRange(1.0, 2.0)


def test_axis_value_range_and_centres() -> None:
    axis = ImageCubeAxis(3, "FREQ", 3, 7.75e8, 9.25e8, 5.0e7)

    assert axis.value_range(2, 3) == ValueRange(8.25e8, 9.25e8)
    assert axis.pixel_centre(1) == pytest.approx(8.0e8)


def test_bounds_equality_ignores_plane_counters_and_params() -> None:
    first = GeneratedFileBounds.square("0.5", "0.5", 360.0)
    first.set_dim_bounds(0, "2:3")
    first.min_plane = 5
    first.params = "BAND=0.3333 0.3529"
    second = GeneratedFileBounds("0.5", "0.5", "360.000000")
    second.set_dim_bounds(0, "2:3")

    assert first == second
    assert hash(first) == hash(second)
    assert first != GeneratedFileBounds("0.50", "0.5", "360.000000")


def test_bounds_dim_index_is_checked() -> None:
    bounds = GeneratedFileBounds()
    with pytest.raises(ValueError):
        bounds.set_dim_bounds(3, "1")
    with pytest.raises(ValueError):
        bounds.get_dim_bounds(-1)


def test_bounds_string_round_trip() -> None:
    bounds = GeneratedFileBounds("12.250000", "35.000000", "0.5", "2.0")
    bounds.set_dim_bounds(1, "1:4")
    bounds.num_planes = 4

    text = bounds.to_string()

    assert text == "12.250000 35.000000 0.5 2.0 D null 1:4 N 4"
    parsed = GeneratedFileBounds.from_string(text)
    assert parsed == bounds
    assert parsed.num_planes == 4
    assert GeneratedFileBounds.square("1", "2", 3.0).to_string() == (
        "1 2 3.000000 3.000000 D null null N 1"
    )
    with pytest.raises(ValueError):
        GeneratedFileBounds.from_string("1 2")


def test_fov_estimate() -> None:
    assert GeneratedFileBounds.square("1", "2", 3.0).calculate_fov_estimate() == pytest.approx(9.0)
    rectangle = GeneratedFileBounds("1", "2", "0.5", "2.0")
    assert rectangle.calculate_fov_estimate() == pytest.approx(1.0)


def test_copy_spatial_leaves_provenance() -> None:
    bounds = GeneratedFileBounds("1", "2", "3", params="POS=CIRCLE 1 2 1.5")
    copy = bounds.copy_spatial()

    assert copy == bounds
    assert copy.params is None
    copy.set_dim_bounds(0, "1")
    assert bounds.get_dim_bounds(0) is None


def test_param_map_is_case_insensitive() -> None:
    params = ParamMap({"pos": ["CIRCLE 1 2 3"]})
    params.add("Pos", "RANGE 1 2 3 4")
    params.add("pol", " ")

    assert params.get("POS") == ["CIRCLE 1 2 3", "RANGE 1 2 3 4"]
    assert "pos" in params
    assert params.get("band") is None
    assert not params.has_values("POL")
    assert params.keys() == ["POS", "POL"]
    assert len(params) == 2
