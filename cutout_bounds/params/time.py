"""TIME parameter validation for MJD intervals."""

from __future__ import annotations

import re
from collections.abc import Sequence

from cutout_bounds.params.messages import usage_fault

_MJD_VALUE = re.compile(r"\d+(?:\.\d+)?")
_OPEN_VALUE = re.compile(r"[+-]Inf")

INVALID_TIME_FORMAT = usage_fault(
    "Your query contained an invalid time format. This query accepts exactly two time "
    "values in MJD format, e.g.\t55678.123456 55690.654321"
)
INVALID_TIME_ORDER = usage_fault(
    "The first date in your query must be earlier (chronologically) than the second"
)


def _invalid_values_message(values: Sequence[str]) -> str:
    return usage_fault(
        f"Your query contained an invalid time format: [{', '.join(values)}]. "
        "This query accepts +/-Inf and the MJD format, e.g. -Inf 55690.654321"
    )


def validate_time(values: Sequence[str]) -> list[str]:
    """Validate TIME values, each a pair of MJD dates or open ``+/-Inf`` bounds."""

    errors: list[str] = []
    for value in values:
        if not value.strip():
            errors.append(INVALID_TIME_FORMAT)
            continue
        dates = value.split()
        if any(not (_MJD_VALUE.fullmatch(d) or _OPEN_VALUE.fullmatch(d)) for d in dates):
            errors.append(_invalid_values_message(values))
            continue
        if len(dates) != 2:
            errors.append(INVALID_TIME_FORMAT)
            continue
        start, end = dates
        # float() reads the +/-Inf tokens, so open ends are ordered too.
        if float(start) > float(end):
            errors.append(INVALID_TIME_ORDER)
    return errors


__all__ = ["INVALID_TIME_FORMAT", "INVALID_TIME_ORDER", "validate_time"]
