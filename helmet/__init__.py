"""Helmet - profile-based Skaffold configuration for Helm deployments.

A single ``helmet.yaml`` describes projects, their images and chart
deployments under named profiles. Helmet resolves the active profile,
applies command line overrides and renders the Skaffold configuration.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Core API
from .core import (
    DocumentValidator,
    TemplateEngine,
    ContextBuilder,
    ProfileResolver,
    OverrideApplier,
    TargetAssembler,
    ToolchainChecker,
    build_image_name,
)
from .services import Resolution, ResolutionService, SkaffoldService

# Data models
from .models import (
    Document,
    Profile,
    Project,
    Deployment,
    Image,
    Options,
    GitState,
    TemplateContext,
    TargetDocument,
    CliOverrides,
)

# Exceptions
from .api.exceptions import (
    HelmetError,
    DocumentError,
    SchemaError,
    ResolutionError,
    OverrideError,
    TemplateError,
    ToolchainError,
)

from .utils import build_overrides

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Main classes
    "DocumentValidator",
    "TemplateEngine",
    "ContextBuilder",
    "ProfileResolver",
    "OverrideApplier",
    "TargetAssembler",
    "ToolchainChecker",
    "Resolution",
    "ResolutionService",
    "SkaffoldService",

    # Functions
    "build_image_name",
    "build_overrides",

    # Models
    "Document",
    "Profile",
    "Project",
    "Deployment",
    "Image",
    "Options",
    "GitState",
    "TemplateContext",
    "TargetDocument",
    "CliOverrides",

    # Exceptions
    "HelmetError",
    "DocumentError",
    "SchemaError",
    "ResolutionError",
    "OverrideError",
    "TemplateError",
    "ToolchainError",
]
