"""Business logic services for helmet"""

from .resolution_service import Resolution, ResolutionService, find_document_path, load_document
from .skaffold_service import CommandResult, DestroyResult, SkaffoldService

__all__ = [
    "Resolution",
    "ResolutionService",
    "find_document_path",
    "load_document",
    "CommandResult",
    "DestroyResult",
    "SkaffoldService",
]
