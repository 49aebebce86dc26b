"""
Shared test fixtures.
"""

import copy

import pytest
import yaml

from helmet.core.context_builder import ContextBuilder
from helmet.models.context import GitState, TemplateContext

GIT_STATE = GitState(
    tag=None,
    commit="0123456789abcdef0123456789abcdef01234567",
    branch="main",
    dirty=False,
)

DESCRIPTOR = {
    "profiles": {
        "$base": {
            "options": {"cleanup": False},
        },
        "ci": {
            "default": True,
            "options": {"push": True},
            "projects": {
                "api": {
                    "image": {"name": "api", "context": "./api"},
                    "deployments": {
                        "primary": {"chart": "./chart", "namespace": "ns"},
                    },
                },
            },
        },
    },
}


@pytest.fixture
def git_state():
    """Fixed git state: untagged, clean, on main."""
    return GIT_STATE


@pytest.fixture
def template_context(git_state):
    """Template context with deterministic values."""
    return TemplateContext(
        user="dev",
        timestamp="2024-01-20T10:30:00.000Z",
        git=git_state,
        env={"HOME": "/home/dev", "CI": "true"},
        params={},
    )


@pytest.fixture
def context_builder(git_state):
    """Context builder that never shells out to git."""
    async def query(path):
        return git_state

    return ContextBuilder(vcs_query=query)


@pytest.fixture
def descriptor():
    """Minimal descriptor: base profile, default ci profile, one project."""
    return copy.deepcopy(DESCRIPTOR)


@pytest.fixture
def write_descriptor(tmp_path):
    """Write a descriptor to helmet.yaml under tmp_path and return its path."""
    def write(data, name="helmet.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return write
