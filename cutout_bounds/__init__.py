"""Resolution of astronomical cutout requests into pixel-indexed extraction bounds."""

from .config import EngineConfig, load_config
from .geometry import AxisModelError, build_param_combos, get_axis_list, get_dimension_sets
from .models import GeneratedFileBounds, ImageCubeAxis, ImageProduct, ParamMap, ValueRange
from .params import ParamKind, validate_params
from .service import CandidateLimitError, GenerateFileService
from .verify import OverlapVerificationError, OverlapVerifier, SqlOverlapVerifier

__all__ = [
    "AxisModelError",
    "CandidateLimitError",
    "EngineConfig",
    "GenerateFileService",
    "GeneratedFileBounds",
    "ImageCubeAxis",
    "ImageProduct",
    "OverlapVerificationError",
    "OverlapVerifier",
    "ParamKind",
    "ParamMap",
    "SqlOverlapVerifier",
    "ValueRange",
    "build_param_combos",
    "get_axis_list",
    "get_dimension_sets",
    "load_config",
    "validate_params",
]
