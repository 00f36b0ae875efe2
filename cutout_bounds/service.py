"""Resolution of a cutout request into the bounds of each file to generate."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from cutout_bounds.config import EngineConfig
from cutout_bounds.geometry.axes import get_axis_list
from cutout_bounds.geometry.combos import build_param_combos
from cutout_bounds.geometry.dimensions import get_dimension_sets, has_dimension_criteria
from cutout_bounds.geometry.spatial import (
    calc_circle_bounds,
    calc_polygon_bounds,
    calc_pos_generated_file_bounds,
)
from cutout_bounds.models import (
    GeneratedFileBounds,
    ImageCubeAxis,
    ImageProduct,
    ParamMap,
    ValueRange,
)
from cutout_bounds.params import POSITIONAL_KINDS, ParamKind
from cutout_bounds.verify import OverlapVerificationError, OverlapVerifier

_LOGGER = logging.getLogger(__name__)

_POSITIONAL_CALCULATORS = {
    ParamKind.POS: calc_pos_generated_file_bounds,
    ParamKind.CIRCLE: calc_circle_bounds,
    ParamKind.POLYGON: calc_polygon_bounds,
}


class CandidateLimitError(ValueError):
    """Raised when a request expands into more candidates than the engine allows."""


def _parse_dim_bounds(dim_bounds: str) -> tuple[int, int]:
    low, _, high = dim_bounds.partition(":")
    return int(low), int(high or low)


def _join_params(*parts: str | None) -> str:
    return ",".join(part for part in parts if part)


@dataclass(slots=True)
class GenerateFileService:
    """Turns request parameters into verified cutout bounds for one image cube.

    ``verifier`` checks each candidate against the stored footprint of the image. When it
    is ``None``, or no candidate id is given, candidates are returned unverified.
    """

    verifier: OverlapVerifier | None = None
    config: EngineConfig = field(default_factory=EngineConfig)

    def build_pos_bounds(self, param_map: ParamMap) -> list[GeneratedFileBounds]:
        """Spatial bounds for each positional value, in POS, CIRCLE, POLYGON order."""

        bounds_list: list[GeneratedFileBounds] = []
        for kind in POSITIONAL_KINDS:
            for value in param_map.get(kind.value) or ():
                if not value.strip():
                    continue
                bounds = _POSITIONAL_CALCULATORS[kind](value)
                if bounds is None:
                    continue
                bounds.params = f"{kind.value}={value}"
                bounds_list.append(bounds)
        return bounds_list

    def default_bounds(self, product: ImageProduct) -> GeneratedFileBounds:
        """Whole-sky bounds centred on the image, used when no position was requested."""

        ra = str(product.ra_deg) if product.ra_deg is not None else "0.0"
        dec = str(product.dec_deg) if product.dec_deg is not None else "0.0"
        return GeneratedFileBounds.square(ra, dec, self.config.default_sky_width_deg)

    def calc_generated_file_bounds(
        self,
        param_map: ParamMap,
        product: ImageProduct,
        candidate_id: str | None = None,
        errors: list[str] | None = None,
    ) -> list[GeneratedFileBounds]:
        """Return the bounds of every file to generate from ``product``.

        Parameters must already have been validated. Candidates are ordered by positional
        value first and plane selection second. Candidates rejected by the overlap verifier
        are dropped and described in ``errors`` as ``<params>,ID=<candidate_id>``.
        """

        errors = errors if errors is not None else []
        pos_bounds_list = self.build_pos_bounds(param_map)
        has_positional = any(param_map.has_values(kind.value) for kind in POSITIONAL_KINDS)
        if not pos_bounds_list:
            if has_positional or not has_dimension_criteria(param_map):
                _LOGGER.info(
                    "No spatial bounds for %s on image %s", param_map, product.product_id
                )
                return []
            pos_bounds_list = [self.default_bounds(product)]

        axis_list = get_axis_list(product)
        dimension_sets = get_dimension_sets(param_map, axis_list, self.config)

        total = len(pos_bounds_list) * len(dimension_sets)
        limit = self.config.max_candidates
        if limit is not None and total > limit:
            raise CandidateLimitError(
                f"Request would generate {total} files from image {product.product_id}, "
                f"the limit is {limit}"
            )

        bounds_list: list[GeneratedFileBounds] = []
        for pos_bounds in pos_bounds_list:
            for plane_range in dimension_sets:
                bounds = self._combine(pos_bounds, plane_range, axis_list)
                if candidate_id is not None and not self._verify(
                    bounds, plane_range, axis_list, product
                ):
                    _LOGGER.warning(
                        "Bounds %s do not overlap the data of image %s",
                        bounds.params,
                        candidate_id,
                    )
                    errors.append(_join_params(bounds.params, f"ID={candidate_id}"))
                    continue
                bounds_list.append(bounds)

        self._log_unsatisfied(param_map, bounds_list)
        _LOGGER.info(
            "Applied %s to image %s and produced bounds of %s",
            param_map,
            product.product_id,
            [str(bounds) for bounds in bounds_list],
        )
        return bounds_list

    @staticmethod
    def _combine(
        pos_bounds: GeneratedFileBounds,
        plane_range: GeneratedFileBounds,
        axis_list: Sequence[ImageCubeAxis],
    ) -> GeneratedFileBounds:
        bounds = pos_bounds.copy_spatial()
        for index, dim_range in enumerate(plane_range.dim_bounds):
            if dim_range is None or index >= len(axis_list):
                continue
            axis = axis_list[index]
            # Axes that only ever hold a single plane need no selection.
            if axis.size > 1 or axis.plane_span > 1:
                bounds.set_dim_bounds(index, dim_range)
        bounds.num_planes = plane_range.num_planes
        bounds.min_plane = plane_range.min_plane
        bounds.max_plane = plane_range.max_plane
        bounds.params = _join_params(pos_bounds.params, plane_range.params) or None
        return bounds

    def _axis_ranges(
        self, plane_range: GeneratedFileBounds, axis_list: Sequence[ImageCubeAxis]
    ) -> tuple[ValueRange | None, ValueRange | None]:
        spectral_range: ValueRange | None = None
        pol_range: ValueRange | None = None
        for axis, dim_range in zip(axis_list, plane_range.dim_bounds):
            if dim_range is None:
                continue
            first, last = _parse_dim_bounds(dim_range)
            if self.config.is_frequency_axis(axis.name):
                spectral_range = axis.value_range(first, last)
            elif self.config.is_polarization_axis(axis.name):
                pol_range = ValueRange(
                    round(axis.pixel_centre(first)), round(axis.pixel_centre(last))
                )
        return spectral_range, pol_range

    def _verify(
        self,
        bounds: GeneratedFileBounds,
        plane_range: GeneratedFileBounds,
        axis_list: Sequence[ImageCubeAxis],
        product: ImageProduct,
    ) -> bool:
        if self.verifier is None:
            _LOGGER.debug("No overlap verifier configured, accepting %s", bounds.params)
            return True
        spectral_range, pol_range = self._axis_ranges(plane_range, axis_list)
        try:
            return self.verifier.check(bounds, spectral_range, pol_range, product.product_id)
        except OverlapVerificationError:
            raise
        except Exception as exc:
            raise OverlapVerificationError(
                f"Overlap check failed for image {product.product_id}: {exc}"
            ) from exc

    @staticmethod
    def _log_unsatisfied(param_map: ParamMap, bounds_list: Sequence[GeneratedFileBounds]) -> None:
        if not _LOGGER.isEnabledFor(logging.DEBUG):
            return
        combos = build_param_combos(param_map)
        for bounds in bounds_list:
            if bounds.params in combos:
                combos.remove(bounds.params)
        if combos:
            _LOGGER.debug("Parameter combinations without a generated file: %s", combos)


__all__ = ["CandidateLimitError", "GenerateFileService"]
