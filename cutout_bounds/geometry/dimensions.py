"""Resolution of BAND, POL and COORD criteria into per-axis pixel selections."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from cutout_bounds.config import EngineConfig
from cutout_bounds.geometry.axes import calculate_axis_overlap
from cutout_bounds.models import (
    MAX_DIM_AXES,
    GeneratedFileBounds,
    ImageCubeAxis,
    ParamMap,
    ValueRange,
)
from cutout_bounds.params import DIMENSION_KINDS, ParamKind
from cutout_bounds.params.band import get_freq_ranges
from cutout_bounds.params.coord import get_ranges_for_axis
from cutout_bounds.params.polarization import get_pol_params, get_pol_ranges

_LOGGER = logging.getLogger(__name__)

PixelRange = tuple[int, int]


def has_dimension_criteria(param_map: ParamMap) -> bool:
    """Return ``True`` when a BAND, POL or COORD parameter carries a non-blank value."""

    return any(param_map.has_values(kind.value) for kind in DIMENSION_KINDS)


def get_axis_criteria(
    axis: ImageCubeAxis, param_map: ParamMap, config: EngineConfig
) -> list[tuple[ValueRange, str]]:
    """Collect the value ranges that apply to ``axis`` with their provenance fragments."""

    criteria: list[tuple[ValueRange, str]] = []
    if config.is_frequency_axis(axis.name):
        band_params = [
            value for value in param_map.get(ParamKind.BAND.value) or () if value.strip()
        ]
        for value, freq_range in zip(band_params, get_freq_ranges(band_params)):
            criteria.append((freq_range, f"BAND={value}"))
    elif config.is_polarization_axis(axis.name):
        pol_params = param_map.get(ParamKind.POL.value)
        criteria.extend(zip(get_pol_ranges(pol_params), get_pol_params(pol_params)))
    criteria.extend(get_ranges_for_axis(param_map.get(ParamKind.COORD.value), axis.name))
    return criteria


def _axis_pixel_ranges(
    axis: ImageCubeAxis, criteria: Sequence[tuple[ValueRange, str]]
) -> list[tuple[PixelRange, str]]:
    if not criteria:
        return [((1, axis.size), "")]
    pixel_ranges: list[tuple[PixelRange, str]] = []
    for value_range, param in criteria:
        overlap = calculate_axis_overlap(axis, value_range)
        if overlap is None:
            _LOGGER.debug("%s does not overlap axis %s", param, axis.name)
            continue
        pixel_ranges.append((overlap, param))
    return pixel_ranges


def build_range_combos(
    axis_ranges: Sequence[Sequence[tuple[PixelRange, str]]],
) -> list[list[tuple[PixelRange, str]]]:
    """Cross product of the per-axis selections, outer axes varying slowest."""

    if not axis_ranges:
        return [[]]
    inner_combos = build_range_combos(axis_ranges[1:])
    return [[selection, *inner] for selection in axis_ranges[0] for inner in inner_combos]


_FRAGMENT_ORDER = {kind.value: rank for rank, kind in enumerate(DIMENSION_KINDS)}


def _fragment_rank(param: str) -> int:
    return _FRAGMENT_ORDER.get(param.partition("=")[0], len(_FRAGMENT_ORDER))


def format_pixel_range(pixel_range: PixelRange) -> str:
    low, high = pixel_range
    return str(low) if low == high else f"{low}:{high}"


def _bounds_for_combo(
    axis_list: Sequence[ImageCubeAxis], combo: Sequence[tuple[PixelRange, str]]
) -> GeneratedFileBounds:
    bounds = GeneratedFileBounds()
    params: list[str] = []
    for index, ((low, high), param) in enumerate(combo):
        bounds.set_dim_bounds(index, format_pixel_range((low, high)))
        if param:
            params.append(param)
    pixel_ranges = [pixel_range for pixel_range, _ in combo]
    spans = [axis.plane_span for axis in axis_list]
    bounds.num_planes = math.prod(high - low + 1 for low, high in pixel_ranges)
    bounds.min_plane = 1 + sum((low - 1) * span for (low, _), span in zip(pixel_ranges, spans))
    bounds.max_plane = 1 + sum((high - 1) * span for (_, high), span in zip(pixel_ranges, spans))
    # BAND, POL then COORD, whatever the axis order of the cube.
    params.sort(key=_fragment_rank)
    bounds.params = ",".join(params) or None
    return bounds


def get_dimension_sets(
    param_map: ParamMap,
    axis_list: Sequence[ImageCubeAxis],
    config: EngineConfig | None = None,
) -> list[GeneratedFileBounds]:
    """Return one plane selection per combination of the non-spatial criteria.

    With no non-spatial axes a single empty selection (the whole image) is returned,
    unless dimension criteria were requested, in which case nothing can satisfy them.
    Without criteria the whole cube is selected. Criteria that miss an axis entirely
    are dropped.
    """

    config = config or EngineConfig()
    if not axis_list:
        return [] if has_dimension_criteria(param_map) else [GeneratedFileBounds()]

    if not has_dimension_criteria(param_map):
        first = axis_list[0]
        total_planes = first.size * first.plane_span
        return [GeneratedFileBounds(max_plane=total_planes, num_planes=total_planes)]

    if len(axis_list) > MAX_DIM_AXES:
        raise ValueError(f"At most {MAX_DIM_AXES} non-spatial axes are supported")

    axis_ranges = [
        _axis_pixel_ranges(axis, get_axis_criteria(axis, param_map, config)) for axis in axis_list
    ]
    return [_bounds_for_combo(axis_list, combo) for combo in build_range_combos(axis_ranges)]


__all__ = [
    "build_range_combos",
    "format_pixel_range",
    "get_axis_criteria",
    "get_dimension_sets",
    "has_dimension_criteria",
]
