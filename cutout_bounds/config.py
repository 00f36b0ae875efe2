"""Engine configuration loaded from YAML settings."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

_DEFAULT_SETTINGS_PATH = Path(__file__).resolve().with_name("settings.yaml")


@dataclass(slots=True)
class EngineConfig:
    overlap_query: str | None = None
    frequency_axis_names: tuple[str, ...] = ("FREQ",)
    polarization_axis_names: tuple[str, ...] = ("STOKES",)
    max_candidates: int | None = None
    default_sky_width_deg: float = 360.0
    extra: dict[str, Any] = field(default_factory=dict)

    def is_frequency_axis(self, name: str) -> bool:
        return name.upper() in {axis.upper() for axis in self.frequency_axis_names}

    def is_polarization_axis(self, name: str) -> bool:
        return name.upper() in {axis.upper() for axis in self.polarization_axis_names}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> EngineConfig:
        known = {item.name for item in fields(cls)} - {"extra"}
        max_candidates = payload.get("max_candidates")
        return cls(
            overlap_query=payload.get("overlap_query"),
            frequency_axis_names=tuple(payload.get("frequency_axis_names") or ("FREQ",)),
            polarization_axis_names=tuple(
                payload.get("polarization_axis_names") or ("STOKES",)
            ),
            max_candidates=int(max_candidates) if max_candidates is not None else None,
            default_sky_width_deg=float(payload.get("default_sky_width_deg", 360.0)),
            extra={key: value for key, value in payload.items() if key not in known},
        )


def load_config(path: Path | str | None = None) -> EngineConfig:
    """Load engine settings, defaulting to the packaged ``settings.yaml``."""

    settings_path = Path(path) if path is not None else _DEFAULT_SETTINGS_PATH
    try:
        payload = yaml.safe_load(settings_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid settings file {settings_path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Settings file {settings_path} must contain a mapping")
    return EngineConfig.from_dict(payload)


__all__ = ["EngineConfig", "load_config"]
