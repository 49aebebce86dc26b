"""CLI override models"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class CliOverrides:
    """Values supplied on the command line

    Attributes:
        profile: Explicit profile name, or None to use the default profile
        options: Nested ``--option.*`` values
        metadata: Nested ``--metadata.*`` values
        projects: ``--project.<pattern>.*`` partials keyed by pattern, in
            the order they were given
        params: Every dotted argument flattened to ``a.b.c`` keys, used by
            ``{% param %}`` references
    """

    profile: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    projects: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
