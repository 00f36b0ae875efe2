"""Shared data models for cutout bounds resolution."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

MAX_DIM_AXES = 3


@dataclass(frozen=True, slots=True)
class ValueRange:
    """Closed interval of physical values on an axis, e.g. 8.0e8 to 9.0e8 Hz on FREQ."""

    min_value: float
    max_value: float

    def is_open_low(self) -> bool:
        return math.isinf(self.min_value) and self.min_value < 0

    def is_open_high(self) -> bool:
        return math.isinf(self.max_value) and self.max_value > 0


@dataclass(slots=True)
class ImageCubeAxis:
    """A non-spatial axis of a multi-dimensional image cube (e.g. FREQ or STOKES).

    ``min_val`` and ``max_val`` are the outer edges of the first and last pixels, so a
    pixel ``n`` covers ``[min_val + (n - 1) * delta, min_val + n * delta)``.
    ``plane_span`` is the number of planes each step on this axis spans, i.e. the total
    size of all later axes.
    """

    index: int
    name: str
    size: int
    min_val: float
    max_val: float
    delta: float
    plane_span: int = 1

    def value_range(self, first_pixel: int, last_pixel: int) -> ValueRange:
        """Return the physical range covered by an inclusive, 1-based pixel range."""

        low = self.min_val + (first_pixel - 1) * self.delta
        high = self.min_val + last_pixel * self.delta
        return ValueRange(min(low, high), max(low, high))

    def pixel_centre(self, pixel: int) -> float:
        return self.min_val + (pixel - 0.5) * self.delta


@dataclass(slots=True, eq=False)
class GeneratedFileBounds:
    """The resolved extraction window for one candidate cutout.

    Coordinates are kept as strings so that the caller's formatting survives into the
    extraction command and the provenance shown to the user.
    """

    center_ra: str | None = None
    center_dec: str | None = None
    width: str | None = None
    height: str | None = None
    min_plane: int = 1
    max_plane: int = 1
    num_planes: int = 1
    params: str | None = None
    dim_bounds: list[str | None] = field(default_factory=lambda: [None] * MAX_DIM_AXES)

    @classmethod
    def square(cls, center_ra: str, center_dec: str, size: float) -> GeneratedFileBounds:
        """Bounds sharing one dimension for width and height (height left unset)."""

        return cls(center_ra, center_dec, f"{size:.6f}")

    @classmethod
    def from_decimals(
        cls, center_ra: Decimal, center_dec: Decimal, width: Decimal, height: Decimal
    ) -> GeneratedFileBounds:
        return cls(
            format(center_ra, "f"),
            format(center_dec, "f"),
            format(width, "f"),
            format(height, "f"),
        )

    @classmethod
    def from_string(cls, text: str) -> GeneratedFileBounds:
        """Parse the output of :meth:`to_string`."""

        values = text.split()
        if len(values) < 3:
            raise ValueError(f"Bounds text needs at least ra, dec and width: {text!r}")
        bounds = cls(values[0], values[1], values[2], values[3] if len(values) > 3 else None)
        position = 4
        if len(values) > position and values[position] == "D":
            position += 1
            dim_index = 0
            while len(values) > position and values[position] != "N":
                token = values[position]
                bounds.set_dim_bounds(dim_index, None if token == "null" else token)
                dim_index += 1
                position += 1
        if len(values) > position and values[position] == "N":
            position += 1
            bounds.num_planes = int(values[position]) if len(values) > position else 1
        return bounds

    def copy_spatial(self) -> GeneratedFileBounds:
        """Copy the spatial window and plane selection, leaving provenance unset."""

        return GeneratedFileBounds(
            self.center_ra,
            self.center_dec,
            self.width,
            self.height,
            min_plane=self.min_plane,
            max_plane=self.max_plane,
            dim_bounds=list(self.dim_bounds),
        )

    def get_dim_bounds(self, index: int) -> str | None:
        self._check_dim_index(index)
        return self.dim_bounds[index]

    def set_dim_bounds(self, index: int, bounds: str | None) -> None:
        self._check_dim_index(index)
        self.dim_bounds[index] = bounds

    def calculate_fov_estimate(self) -> float:
        """Estimate the field of view of the window in square degrees."""

        width = float(self.width) if self.width is not None else 0.0
        if self.height is not None:
            return width * float(self.height)
        return width * width

    def to_string(self) -> str:
        last_dim = max(
            (index for index, value in enumerate(self.dim_bounds) if value is not None),
            default=1,
        )
        dims = " ".join(
            self.dim_bounds[index] or "null" for index in range(max(last_dim + 1, 2))
        )
        height = self.height if self.height is not None else self.width
        return (
            f"{self.center_ra} {self.center_dec} {self.width} {height} "
            f"D {dims} N {self.num_planes}"
        )

    @staticmethod
    def _check_dim_index(index: int) -> None:
        if index < 0 or index >= MAX_DIM_AXES:
            raise ValueError(f"index for bounds must be between 0 and {MAX_DIM_AXES - 1}")

    def _key(self) -> tuple[Any, ...]:
        return (
            self.center_ra,
            self.center_dec,
            self.width,
            self.height,
            tuple(self.dim_bounds),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeneratedFileBounds):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.to_string()


@dataclass(slots=True)
class ImageProduct:
    """Read-only view of an image cube as stored by the archive."""

    product_id: int | str | None = None
    ra_deg: float | None = None
    dec_deg: float | None = None
    dimensions_json: str | Mapping[str, Any] | None = None


class ParamMap:
    """Case-insensitive, multi-valued map of request parameters.

    Keys are stored upper-cased; values keep the order in which they were added.
    """

    __slots__ = ("_values",)

    def __init__(self, values: dict[str, Iterable[str]] | None = None) -> None:
        self._values: dict[str, list[str]] = {}
        for key, entries in (values or {}).items():
            self.add(key, *entries)

    def add(self, key: str, *values: str) -> None:
        self._values.setdefault(key.strip().upper(), []).extend(values)

    def get(self, key: str) -> list[str] | None:
        values = self._values.get(key.strip().upper())
        return list(values) if values is not None else None

    def has_values(self, key: str) -> bool:
        """Return ``True`` when ``key`` carries at least one non-blank value."""

        return any(value.strip() for value in self._values.get(key.strip().upper(), []))

    def keys(self) -> list[str]:
        return list(self._values)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.strip().upper() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ParamMap({self._values!r})"


__all__ = [
    "GeneratedFileBounds",
    "ImageCubeAxis",
    "ImageProduct",
    "MAX_DIM_AXES",
    "ParamMap",
    "ValueRange",
]
