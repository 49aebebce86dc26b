"""Data models for helmet"""

from .document import Document, Profile, Options, Project, Image, Deployment
from .context import GitState, TemplateContext
from .target import Artifact, Release, TargetDocument
from .overrides import CliOverrides

__all__ = [
    # Descriptor models
    "Document",
    "Profile",
    "Options",
    "Project",
    "Image",
    "Deployment",

    # Context models
    "GitState",
    "TemplateContext",

    # Target models
    "Artifact",
    "Release",
    "TargetDocument",

    # Override models
    "CliOverrides",
]
