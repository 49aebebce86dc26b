"""Public API for helmet"""

from .exceptions import (
    HelmetError,
    DocumentError,
    SchemaError,
    FieldError,
    ResolutionError,
    NoDefaultProfileError,
    ProfileNotFoundError,
    MissingProjectFieldError,
    MissingDeploymentFieldError,
    OverrideError,
    TemplateError,
    MissingMetadataError,
    MissingParameterError,
    ToolchainError,
)

__all__ = [
    "HelmetError",
    "DocumentError",
    "SchemaError",
    "FieldError",
    "ResolutionError",
    "NoDefaultProfileError",
    "ProfileNotFoundError",
    "MissingProjectFieldError",
    "MissingDeploymentFieldError",
    "OverrideError",
    "TemplateError",
    "MissingMetadataError",
    "MissingParameterError",
    "ToolchainError",
]
