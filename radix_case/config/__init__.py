from .parameters import (
    ConfigurationError,
    HoleSpec,
    ParameterTable,
    Tessellation,
    load_parameters,
    parameters_from_dict,
    parameters_to_dict,
)
from .validation import (
    MIN_MATING_SEGMENTS,
    require_valid,
    tessellation_warnings,
    validate_parameters,
)

__all__ = [
    "ConfigurationError",
    "HoleSpec",
    "MIN_MATING_SEGMENTS",
    "ParameterTable",
    "Tessellation",
    "load_parameters",
    "parameters_from_dict",
    "parameters_to_dict",
    "require_valid",
    "tessellation_warnings",
    "validate_parameters",
]
