"""POL parameter handling: Stokes states, pixel ranges and provenance grouping."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from cutout_bounds.models import ValueRange
from cutout_bounds.params.messages import usage_fault


class PolarizationState(str, Enum):
    """Stokes parameters in their canonical FITS order."""

    I = "I"  # noqa: E741
    Q = "Q"
    U = "U"
    V = "V"

    @property
    def fits_value(self) -> int:
        return _FITS_VALUES[self]

    @classmethod
    def parse(cls, value: str) -> PolarizationState:
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            raise ValueError(f"Unknown polarisation state: {value!r}") from exc


_FITS_VALUES = {
    PolarizationState.I: 1,
    PolarizationState.Q: 2,
    PolarizationState.U: 3,
    PolarizationState.V: 4,
}


def validate_pol(values: Sequence[str]) -> list[str]:
    """Validate POL values; a blank value is permitted and selects nothing."""

    errors: list[str] = []
    for value in values:
        candidate = value.strip().upper()
        if candidate and candidate not in PolarizationState.__members__:
            errors.append(usage_fault(f"Invalid POL value {value}"))
    return errors


def _sorted_states(pol_params: Sequence[str] | None) -> list[PolarizationState]:
    states = {PolarizationState.parse(value) for value in pol_params or () if value.strip()}
    return sorted(states, key=lambda state: state.fits_value)


def _group_states(pol_params: Sequence[str] | None) -> list[list[PolarizationState]]:
    """Group the requested states into runs of adjacent FITS values."""

    groups: list[list[PolarizationState]] = []
    for state in _sorted_states(pol_params):
        if groups and groups[-1][-1].fits_value + 1 == state.fits_value:
            groups[-1].append(state)
        else:
            groups.append([state])
    return groups


def get_pol_ranges(pol_params: Sequence[str] | None) -> list[ValueRange]:
    """Return the contiguous FITS value ranges covered by the requested states.

    ``["Q", "V", "U"]`` yields a single range ``2..4`` while ``["U", "I"]`` yields
    ``1..1`` and ``3..3``.
    """

    return [
        ValueRange(group[0].fits_value, group[-1].fits_value)
        for group in _group_states(pol_params)
    ]


def get_pol_params(pol_params: Sequence[str] | None) -> list[str]:
    """Return one provenance fragment per range produced by :func:`get_pol_ranges`."""

    return [
        ",".join(f"POL={state.value}" for state in group)
        for group in _group_states(pol_params)
    ]


__all__ = [
    "PolarizationState",
    "get_pol_params",
    "get_pol_ranges",
    "validate_pol",
]
