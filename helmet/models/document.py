"""Descriptor data models

A descriptor is parsed into a ``Document`` holding named ``Profile``
entries. Fields left out of the descriptor stay ``None`` so the merge
layer can tell "unset" apart from an explicit value.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..constants import BASE_PROFILE_SIGIL


@dataclass
class Options:
    """Profile options"""

    push: Optional[bool] = None
    cleanup: Optional[bool] = None
    forward: Optional[bool] = None
    repository: Optional[str] = None
    tag: Optional[str] = None
    namespace: Optional[str] = None
    release: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, omitting unset fields"""
        return {
            key: value
            for key, value in (
                ("push", self.push),
                ("cleanup", self.cleanup),
                ("forward", self.forward),
                ("repository", self.repository),
                ("tag", self.tag),
                ("namespace", self.namespace),
                ("release", self.release),
            )
            if value is not None
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Options':
        """Create from dictionary"""
        data = data or {}
        return cls(
            push=data.get("push"),
            cleanup=data.get("cleanup"),
            forward=data.get("forward"),
            repository=data.get("repository"),
            tag=data.get("tag"),
            namespace=data.get("namespace"),
            release=data.get("release"),
        )


@dataclass
class Image:
    """Image build definition"""

    name: Optional[str] = None
    context: Optional[str] = None
    fqin: Optional[str] = None  # computed: repository-prefixed, tag-suffixed

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {}
        if self.name is not None:
            data["name"] = self.name
        if self.context is not None:
            data["context"] = self.context
        if self.fqin is not None:
            data["fqin"] = self.fqin
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['Image']:
        """Create from dictionary"""
        if data is None:
            return None
        return cls(
            name=data.get("name"),
            context=data.get("context"),
            fqin=data.get("fqin"),
        )


@dataclass
class Deployment:
    """A releasable unit within a project"""

    name: str
    chart: Optional[str] = None
    namespace: Optional[str] = None
    release: Optional[str] = None
    recreate: Optional[bool] = None
    values: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {"name": self.name}
        if self.chart is not None:
            data["chart"] = self.chart
        if self.namespace is not None:
            data["namespace"] = self.namespace
        if self.release is not None:
            data["release"] = self.release
        if self.recreate is not None:
            data["recreate"] = self.recreate
        data["values"] = self.values
        return data

    @classmethod
    def from_dict(cls, name: str, data: Optional[Dict[str, Any]]) -> 'Deployment':
        """Create from dictionary"""
        data = data or {}
        return cls(
            name=name,
            chart=data.get("chart"),
            namespace=data.get("namespace"),
            release=data.get("release"),
            recreate=data.get("recreate"),
            values=dict(data.get("values") or {}),
        )


@dataclass
class Project:
    """A buildable unit owning deployments"""

    name: str
    image: Optional[Image] = None
    sync: Optional[Dict[str, Any]] = None
    deployments: Dict[str, Deployment] = field(default_factory=dict)
    values: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {"name": self.name}
        if self.image is not None:
            data["image"] = self.image.to_dict()
        if self.sync is not None:
            data["sync"] = self.sync
        data["deployments"] = {
            name: deployment.to_dict()
            for name, deployment in self.deployments.items()
        }
        data["values"] = self.values
        return data

    @classmethod
    def from_dict(cls, name: str, data: Optional[Dict[str, Any]]) -> 'Project':
        """Create from dictionary"""
        data = data or {}
        return cls(
            name=name,
            image=Image.from_dict(data.get("image")),
            sync=data.get("sync"),
            deployments={
                deployment_name: Deployment.from_dict(deployment_name, deployment_data)
                for deployment_name, deployment_data in (data.get("deployments") or {}).items()
            },
            values=dict(data.get("values") or {}),
        )


@dataclass
class Profile:
    """One deployment scenario"""

    name: str
    default: Optional[bool] = None
    options: Options = field(default_factory=Options)
    metadata: Dict[str, Any] = field(default_factory=dict)
    projects: Dict[str, Project] = field(default_factory=dict)

    @property
    def is_base(self) -> bool:
        """Base profiles are merged underneath every other profile"""
        return self.name.startswith(BASE_PROFILE_SIGIL)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {"name": self.name}
        if self.default is not None:
            data["default"] = self.default
        data["options"] = self.options.to_dict()
        data["metadata"] = self.metadata
        data["projects"] = {
            name: project.to_dict()
            for name, project in self.projects.items()
        }
        return data

    @classmethod
    def from_dict(cls, name: str, data: Optional[Dict[str, Any]]) -> 'Profile':
        """Create from dictionary"""
        data = data or {}
        return cls(
            name=name,
            default=data.get("default"),
            options=Options.from_dict(data.get("options")),
            metadata=dict(data.get("metadata") or {}),
            projects={
                project_name: Project.from_dict(project_name, project_data)
                for project_name, project_data in (data.get("projects") or {}).items()
            },
        )


@dataclass
class Document:
    """Validated descriptor"""

    profiles: Dict[str, Profile] = field(default_factory=dict)

    def find_base_profile(self) -> Optional[Profile]:
        """First profile whose name carries the base sigil"""
        for profile in self.profiles.values():
            if profile.is_base:
                return profile
        return None

    def find_default_profile(self) -> Optional[Profile]:
        """First profile flagged as default"""
        for profile in self.profiles.values():
            if profile.default:
                return profile
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "profiles": {
                name: profile.to_dict()
                for name, profile in self.profiles.items()
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Document':
        """Create from dictionary"""
        return cls(
            profiles={
                name: Profile.from_dict(name, profile_data)
                for name, profile_data in (data.get("profiles") or {}).items()
            }
        )
