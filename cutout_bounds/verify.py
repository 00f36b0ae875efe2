"""Checks that a candidate cutout overlaps the real data footprint of an image cube."""

from __future__ import annotations

import logging
import sys
from contextlib import closing
from typing import Any, Protocol

from astropy import units as u

from cutout_bounds.config import EngineConfig
from cutout_bounds.models import GeneratedFileBounds, ValueRange

_LOGGER = logging.getLogger(__name__)

_TRUE_RESULTS = {"t", "true", "1", "y", "yes"}
_OPEN_SPECTRAL_RANGE = ValueRange(0.0, sys.float_info.max)
_ALL_POLARIZATIONS = ValueRange(1, 4)


class OverlapVerificationError(RuntimeError):
    """Raised when the overlap check itself fails, as opposed to finding no overlap."""


class OverlapVerifier(Protocol):
    def check(
        self,
        bounds: GeneratedFileBounds,
        spectral_range: ValueRange | None,
        pol_range: ValueRange | None,
        product_id: int | str | None,
    ) -> bool:
        """Return ``True`` when the candidate intersects the product's stored footprint."""


def _radians(degrees: str | None) -> float:
    if degrees is None:
        return 0.0
    return float((float(degrees) * u.deg).to_value(u.rad))


def _sql_literal(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return repr(value)
    return "'" + str(value).replace("'", "''") + "'"


def is_true_result(value: Any) -> bool:
    """Interpret a single query cell returned by a database driver as a boolean."""

    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", "replace")
    return str(value).strip().lower() in _TRUE_RESULTS


class SqlOverlapVerifier:
    """Overlap verifier running a configured SQL predicate through a DB-API connection.

    The query template contains placeholders such as ``<centre_ra_rad>`` and
    ``<image_cube_id>`` which are replaced with literals before execution. The first
    column of the first row is read as the answer.
    """

    def __init__(self, connection: Any, query: str) -> None:
        if not query or not query.strip():
            raise ValueError("An overlap query is required")
        self._connection = connection
        self._query = query

    @classmethod
    def from_config(cls, connection: Any, config: EngineConfig) -> SqlOverlapVerifier:
        if not config.overlap_query:
            raise ValueError("overlap_query is not configured")
        return cls(connection, config.overlap_query)

    def build_query(
        self,
        bounds: GeneratedFileBounds,
        spectral_range: ValueRange | None,
        pol_range: ValueRange | None,
        product_id: int | str | None,
    ) -> str:
        spectral = spectral_range or _OPEN_SPECTRAL_RANGE
        pol = pol_range or _ALL_POLARIZATIONS
        height = bounds.height if bounds.height is not None else bounds.width
        replacements = {
            "<centre_ra_rad>": repr(_radians(bounds.center_ra)),
            "<centre_dec_rad>": repr(_radians(bounds.center_dec)),
            "<width_rad>": repr(_radians(bounds.width)),
            "<height_rad>": repr(_radians(height)),
            "<min_freq>": repr(float(spectral.min_value)),
            "<max_freq>": repr(float(spectral.max_value)),
            "<min_pol>": str(int(pol.min_value)),
            "<max_pol>": str(int(pol.max_value)),
            "<image_cube_id>": _sql_literal(product_id),
        }
        query = self._query
        for placeholder, literal in replacements.items():
            query = query.replace(placeholder, literal)
        return query

    def check(
        self,
        bounds: GeneratedFileBounds,
        spectral_range: ValueRange | None,
        pol_range: ValueRange | None,
        product_id: int | str | None,
    ) -> bool:
        query = self.build_query(bounds, spectral_range, pol_range, product_id)
        _LOGGER.debug("Checking overlap of %s with image %s: %s", bounds, product_id, query)
        try:
            with closing(self._connection.cursor()) as cursor:
                cursor.execute(query)
                row = cursor.fetchone()
        except Exception as exc:
            raise OverlapVerificationError(
                f"Overlap query failed for image {product_id}: {exc}"
            ) from exc
        if row is None:
            _LOGGER.debug("Overlap query for image %s returned no rows", product_id)
            return False
        return is_true_result(row[0])


__all__ = [
    "OverlapVerificationError",
    "OverlapVerifier",
    "SqlOverlapVerifier",
    "is_true_result",
]
