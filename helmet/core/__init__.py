"""Core functionality for helmet"""

from .validation_engine import DocumentValidator, ValidationResult
from .template_engine import TemplateEngine, REFERENCE_RESOLVERS
from .context_builder import ContextBuilder
from .profile_resolver import ProfileResolver
from .override_applier import OverrideApplier, build_image_name
from .target_assembler import TargetAssembler
from .toolchain import ToolchainChecker, ToolStatus

__all__ = [
    "DocumentValidator",
    "ValidationResult",
    "TemplateEngine",
    "REFERENCE_RESOLVERS",
    "ContextBuilder",
    "ProfileResolver",
    "OverrideApplier",
    "build_image_name",
    "TargetAssembler",
    "ToolchainChecker",
    "ToolStatus",
]
