"""CLI commands for helmet"""

from . import wear, deploy, destroy, skaffold, doctor, version

__all__ = [
    "wear",
    "deploy",
    "destroy",
    "skaffold",
    "doctor",
    "version",
]
