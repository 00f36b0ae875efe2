"""FORMAT parameter handling for the output image formats."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from cutout_bounds.params.messages import usage_fault

INVALID_FORMAT_COUNT = usage_fault(
    "Your query contained an invalid format. This query accepts only one format value "
    "e.g. application/fits"
)


class ImageFormat(str, Enum):
    FITS = "fits"
    PNG = "png"

    @property
    def identifiers(self) -> tuple[str, ...]:
        return _IDENTIFIERS[self]

    @classmethod
    def find_matching_format(cls, value: str) -> ImageFormat | None:
        """Return the format named by a MIME type or short name, ignoring case."""

        candidate = value.strip().lower()
        for image_format in cls:
            if candidate in image_format.identifiers:
                return image_format
        return None


_IDENTIFIERS = {
    ImageFormat.FITS: ("application/fits", "image/fits", "fits"),
    ImageFormat.PNG: ("image/png", "png"),
}


def validate_format(values: Sequence[str]) -> list[str]:
    if len(values) != 1 or not values[0].strip():
        return [INVALID_FORMAT_COUNT]
    if ImageFormat.find_matching_format(values[0]) is None:
        return [
            usage_fault(
                f"Your query contained an invalid format: {values[0]}. "
                "Valid formats include fits, image/png"
            )
        ]
    return []


__all__ = ["INVALID_FORMAT_COUNT", "ImageFormat", "validate_format"]
