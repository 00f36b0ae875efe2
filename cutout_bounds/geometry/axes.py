"""Axis model for the non-spatial dimensions of an image cube and pixel overlap lookup."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

from cutout_bounds.models import ImageCubeAxis, ImageProduct, ValueRange

_LOGGER = logging.getLogger(__name__)

_SPATIAL_PREFIXES = ("RA", "DEC")


class AxisModelError(ValueError):
    """Raised when an image dimension description cannot be interpreted."""


def _load_description(product: ImageProduct) -> Mapping[str, Any] | None:
    raw = product.dimensions_json
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, Mapping):
        return raw
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise AxisModelError(
            f"Invalid json dimension string for image {product.product_id}"
        ) from exc
    if not isinstance(payload, Mapping):
        raise AxisModelError(
            f"Dimension description for image {product.product_id} is not an object"
        )
    return payload


def _axis_from_node(index: int, name: str, node: Mapping[str, Any]) -> ImageCubeAxis:
    size = int(node["numPixels"])
    if "pixelSize" in node:
        delta = float(node["pixelSize"])
        min_val = float(node["min"])
        max_val = float(node["max"])
    else:
        # WCS keywords: crval is the centre of pixel crpix.
        delta = float(node["cdelt"])
        min_val = float(node["crval"]) + (0.5 - float(node["crpix"])) * delta
        max_val = min_val + size * delta
    return ImageCubeAxis(index, name, size, min_val, max_val, delta)


def get_axis_list(product: ImageProduct) -> list[ImageCubeAxis]:
    """Return the non-spatial axes of ``product`` in description order.

    Spatial axes (names starting with RA or DEC) are skipped. Each axis' ``plane_span``
    is the number of planes spanned by one step on it, i.e. the product of the sizes of
    the axes after it.
    """

    description = _load_description(product)
    if description is None:
        return []

    axes: list[ImageCubeAxis] = []
    try:
        for position, node in enumerate(description["axes"]):
            name = str(node["name"])
            if name.startswith(_SPATIAL_PREFIXES):
                continue
            axes.append(_axis_from_node(position + 1, name, node))
    except (KeyError, TypeError, ValueError) as exc:
        raise AxisModelError(
            f"Invalid dimension description for image {product.product_id}: {exc}"
        ) from exc

    _assign_plane_spans(axes)
    _LOGGER.debug("Image %s has non-spatial axes %s", product.product_id, axes)
    return axes


def _assign_plane_spans(axes: Sequence[ImageCubeAxis]) -> None:
    if not axes:
        return
    sizes = np.array([axis.size for axis in axes], dtype=np.int64)
    # Work from the innermost (last) axis outwards.
    spans = np.ones_like(sizes)
    spans[:-1] = np.cumprod(sizes[::-1])[::-1][1:]
    for axis, span in zip(axes, spans):
        axis.plane_span = int(span)


def calculate_axis_overlap(axis: ImageCubeAxis, value_range: ValueRange) -> tuple[int, int] | None:
    """Return the inclusive 1-based pixel range of ``axis`` covered by ``value_range``.

    Pixel ``n`` spans ``[min_val + (n - 1) * delta, min_val + n * delta)``, with ``delta``
    negative on axes whose values descend. Open or extreme range ends clamp to the first
    and last pixels; ``None`` means the range does not touch the axis at all.
    """

    if axis.delta == 0:
        return _degenerate_overlap(axis, value_range)

    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        ends = (
            np.floor((np.float64(value_range.min_value) - axis.min_val) / axis.delta),
            np.floor((np.float64(value_range.max_value) - axis.min_val) / axis.delta),
        )

    if np.isnan(ends).any():
        return None
    min_calc, max_calc = min(ends), max(ends)

    last_index = axis.size - 1
    if min_calc > last_index or max_calc < 0:
        return None

    min_pixel = 1 + max(0, int(min_calc)) if np.isfinite(min_calc) else 1
    max_pixel = axis.size if max_calc > last_index else 1 + int(max_calc)
    if max_pixel >= min_pixel:
        return min_pixel, max_pixel
    return None


def _degenerate_overlap(axis: ImageCubeAxis, value_range: ValueRange) -> tuple[int, int] | None:
    # Zero-width pixels all sit at one value, so the range either holds it or misses it.
    low = min(axis.min_val, axis.max_val)
    high = max(axis.min_val, axis.max_val)
    if value_range.min_value <= high and value_range.max_value >= low:
        return 1, axis.size
    return None


__all__ = ["AxisModelError", "calculate_axis_overlap", "get_axis_list"]
