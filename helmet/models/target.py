"""Resolved target document models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..constants import SKAFFOLD_API_VERSION, SKAFFOLD_KIND


@dataclass
class Artifact:
    """One image to build"""

    image: str
    context: str
    sync: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "image": self.image,
            "context": self.context,
            "sync": self.sync,
        }


@dataclass
class Release:
    """One chart release to deploy"""

    name: str
    namespace: str
    chart_path: str
    recreate: bool = False
    overrides: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "name": self.name,
            "recreatePods": self.recreate,
            "namespace": self.namespace,
            "chartPath": self.chart_path,
            "overrides": self.overrides,
        }


@dataclass
class TargetDocument:
    """Skaffold configuration produced from a resolved profile"""

    push: bool
    tag: str
    artifacts: List[Artifact] = field(default_factory=list)
    releases: List[Release] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the Skaffold configuration layout"""
        return {
            "apiVersion": SKAFFOLD_API_VERSION,
            "kind": SKAFFOLD_KIND,
            "build": {
                "local": {
                    "push": self.push,
                },
                "tagPolicy": {
                    "envTemplate": {
                        "template": f"{{{{ .IMAGE_NAME }}}}:{self.tag}",
                    },
                },
                "artifacts": [artifact.to_dict() for artifact in self.artifacts],
            },
            "deploy": {
                "helm": {
                    "releases": [release.to_dict() for release in self.releases],
                },
            },
        }
