"""Git query utilities

Each query degrades to ``None`` (or ``False``) when git is missing, the
directory is not a repository, or the command fails.
"""

import asyncio
import subprocess
from pathlib import Path
from typing import List, Optional

from ..models.context import GitState


def _run_git(args: List[str], path: Optional[Path] = None) -> Optional[str]:
    """
    Run a git command and return its stripped output

    Args:
        args: Git arguments
        path: Working directory

    Returns:
        Command output, or None on failure
    """
    try:
        result = subprocess.run(
            ['git'] + args,
            cwd=path,
            capture_output=True,
            text=True,
            check=True
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError):
        return None


def get_exact_tag(path: Optional[Path] = None) -> Optional[str]:
    """
    Get the tag pointing exactly at HEAD

    Args:
        path: Repository path

    Returns:
        Tag name or None
    """
    return _run_git(['describe', '--tags', '--exact-match'], path) or None


def get_current_commit(path: Optional[Path] = None) -> Optional[str]:
    """
    Get the full hash of HEAD

    Args:
        path: Repository path

    Returns:
        Commit hash or None
    """
    return _run_git(['rev-parse', 'HEAD'], path) or None


def get_current_branch(path: Optional[Path] = None) -> Optional[str]:
    """
    Get current Git branch

    Args:
        path: Repository path

    Returns:
        Branch name or None
    """
    return _run_git(['rev-parse', '--abbrev-ref', 'HEAD'], path) or None


def is_dirty(path: Optional[Path] = None) -> bool:
    """
    Check if the working tree below ``path`` has uncommitted changes

    Args:
        path: Repository path

    Returns:
        True if there are uncommitted changes
    """
    return bool(_run_git(['status', '.', '--porcelain'], path))


async def query_git_state(path: Optional[Path] = None) -> GitState:
    """
    Run all git queries concurrently

    Args:
        path: Repository path

    Returns:
        GitState snapshot
    """
    tag, commit, branch, dirty = await asyncio.gather(
        asyncio.to_thread(get_exact_tag, path),
        asyncio.to_thread(get_current_commit, path),
        asyncio.to_thread(get_current_branch, path),
        asyncio.to_thread(is_dirty, path),
    )
    return GitState(tag=tag, commit=commit, branch=branch, dirty=dirty)
