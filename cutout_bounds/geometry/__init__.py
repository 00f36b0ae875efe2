"""Spatial and per-axis geometry used to build cutout bounds."""

from __future__ import annotations

from .axes import AxisModelError, calculate_axis_overlap, get_axis_list
from .combos import build_param_combos
from .dimensions import get_dimension_sets, has_dimension_criteria
from .spatial import calc_circle_bounds, calc_pos_generated_file_bounds

__all__ = [
    "AxisModelError",
    "build_param_combos",
    "calc_circle_bounds",
    "calc_pos_generated_file_bounds",
    "calculate_axis_overlap",
    "get_axis_list",
    "get_dimension_sets",
    "has_dimension_criteria",
]
