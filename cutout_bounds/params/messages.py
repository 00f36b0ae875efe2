"""Usage fault formatting shared by the parameter validators."""

from __future__ import annotations

USAGE_FAULT_MSG = "UsageFault: {}"


def usage_fault(description: str) -> str:
    return USAGE_FAULT_MSG.format(description)


__all__ = ["USAGE_FAULT_MSG", "usage_fault"]
