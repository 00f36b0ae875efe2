"""Request parameter kinds and their validators."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum

from cutout_bounds.models import ParamMap

from .band import validate_band
from .coord import validate_coord
from .image_format import validate_format
from .polarization import validate_pol
from .position import validate_circle, validate_polygon, validate_pos
from .time import validate_time

_LOGGER = logging.getLogger(__name__)

Validator = Callable[[Sequence[str]], list[str]]


class ParamKind(str, Enum):
    """Parameter keys understood by the cutout engine, in validation order."""

    POS = "POS"
    CIRCLE = "CIRCLE"
    POLYGON = "POLYGON"
    BAND = "BAND"
    POL = "POL"
    TIME = "TIME"
    FORMAT = "FORMAT"
    COORD = "COORD"

    def validate(self, values: Sequence[str]) -> list[str]:
        return _VALIDATORS[self](values)


_VALIDATORS: dict[ParamKind, Validator] = {
    ParamKind.POS: validate_pos,
    ParamKind.CIRCLE: validate_circle,
    ParamKind.POLYGON: validate_polygon,
    ParamKind.BAND: validate_band,
    ParamKind.POL: validate_pol,
    ParamKind.TIME: validate_time,
    ParamKind.FORMAT: validate_format,
    ParamKind.COORD: validate_coord,
}

POSITIONAL_KINDS = (ParamKind.POS, ParamKind.CIRCLE, ParamKind.POLYGON)
DIMENSION_KINDS = (ParamKind.BAND, ParamKind.POL, ParamKind.COORD)


def validate_params(param_map: ParamMap) -> list[str]:
    """Validate every known parameter present in ``param_map``.

    All errors are collected, grouped by parameter kind. Keys the engine does not
    understand are ignored.
    """

    errors: list[str] = []
    for kind in ParamKind:
        values = param_map.get(kind.value)
        if values is None:
            continue
        errors.extend(kind.validate(values))
    if errors:
        _LOGGER.debug("Request parameters failed validation: %s", errors)
    return errors


__all__ = [
    "DIMENSION_KINDS",
    "POSITIONAL_KINDS",
    "ParamKind",
    "validate_params",
]
