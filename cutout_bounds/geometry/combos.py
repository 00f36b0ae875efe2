"""Descriptive combinations of request parameter values."""

from __future__ import annotations

from collections.abc import Sequence

from cutout_bounds.models import ParamMap
from cutout_bounds.params import POSITIONAL_KINDS, ParamKind
from cutout_bounds.params.polarization import get_pol_params

# Non-positional kinds in the order their tokens appear in a combination.
_COMBINED_KINDS = (ParamKind.BAND, ParamKind.POL, ParamKind.COORD)


def _populate_combos(
    existing: Sequence[str], kind: ParamKind, values: Sequence[str] | None
) -> list[str]:
    if not values:
        return list(existing)
    if kind is ParamKind.POL:
        tokens = get_pol_params(values)
    else:
        tokens = [f"{kind.value}={value}" for value in values]

    combos: list[str] = []
    for token in tokens:
        if existing:
            combos.extend(f"{combo},{token}" for combo in existing)
        else:
            combos.append(token)
    return combos


def build_param_combos(param_map: ParamMap) -> list[str]:
    """List every parameter combination that should produce its own generated file.

    Positional values are alternatives to one another. BAND, POL and COORD values are then
    multiplied in, in that order; POL letters that are adjacent in I, Q, U, V order share
    one combination. COORD is not matched against the image axes here.
    """

    combos: list[str] = []
    for kind in POSITIONAL_KINDS:
        combos.extend(_populate_combos([], kind, param_map.get(kind.value)))
    for kind in _COMBINED_KINDS:
        combos = _populate_combos(combos, kind, param_map.get(kind.value))
    return combos


__all__ = ["build_param_combos"]
