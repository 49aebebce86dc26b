# helmet/core/context_builder.py
"""Template context assembly"""

import getpass
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from ..models.context import GitState, TemplateContext
from ..utils.async_utils import run_async
from ..utils.git_utils import query_git_state

VcsQuery = Callable[[Optional[Path]], Awaitable[GitState]]


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def current_user() -> str:
    """OS username, or an empty string when it cannot be determined"""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


class ContextBuilder:
    """Build the read-only template context for one invocation"""

    def __init__(self, path: Optional[Path] = None, vcs_query: Optional[VcsQuery] = None):
        """Initialize context builder

        Args:
            path: Working directory used for VCS queries
            vcs_query: Coroutine function returning a GitState
        """
        self.path = path
        self.vcs_query = vcs_query or query_git_state
        self.logger = logging.getLogger("ContextBuilder")

    async def build_async(self,
                          env: Optional[Mapping[str, str]] = None,
                          params: Optional[Dict[str, Any]] = None) -> TemplateContext:
        """
        Query VCS state and capture the timestamp

        Args:
            env: Environment mapping (defaults to the process environment)
            params: Flattened CLI parameters

        Returns:
            TemplateContext snapshot
        """
        timestamp = utc_timestamp()

        try:
            git = await self.vcs_query(self.path)
        except Exception as e:
            self.logger.warning(f"Could not query git state: {e}")
            git = GitState()

        self.logger.debug(
            f"Git state: tag={git.tag} commit={git.commit} branch={git.branch} dirty={git.dirty}"
        )

        return TemplateContext(
            user=current_user(),
            timestamp=timestamp,
            git=git,
            env=dict(os.environ if env is None else env),
            params=dict(params or {}),
        )

    def build(self,
              env: Optional[Mapping[str, str]] = None,
              params: Optional[Dict[str, Any]] = None) -> TemplateContext:
        """Synchronous wrapper around ``build_async``"""
        return run_async(self.build_async(env, params))
