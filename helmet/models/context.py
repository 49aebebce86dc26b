"""Template context models"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GitState:
    """Version control state captured once per invocation"""

    tag: Optional[str] = None
    commit: Optional[str] = None
    branch: Optional[str] = None
    dirty: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "tag": self.tag,
            "commit": self.commit,
            "branch": self.branch,
            "dirty": self.dirty,
        }


@dataclass(frozen=True)
class TemplateContext:
    """Read-only data visible to every template in one resolution

    ``params`` holds the flattened CLI parameters (``a.b.c`` keys) used by
    ``{% param %}`` references. Scoped values (``profile``, ``project``,
    ``deployment``) are layered on top by ``variables``.
    """

    user: str
    timestamp: str
    git: GitState = field(default_factory=GitState)
    env: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)

    def variables(self, **scopes: Any) -> Dict[str, Any]:
        """Build the variable mapping handed to the template engine

        Args:
            **scopes: Scoped values such as ``profile`` or ``deployment``

        Returns:
            A fresh dictionary; the context itself is never modified
        """
        variables = {
            "user": self.user,
            "timestamp": self.timestamp,
            "git": self.git.to_dict(),
            "env": dict(self.env),
            "params": dict(self.params),
        }
        variables.update(scopes)
        return variables
