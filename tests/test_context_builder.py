"""
Tests for helmet.core.context_builder.
"""

import re
from datetime import datetime, timezone

from helmet.core.context_builder import ContextBuilder, utc_timestamp
from helmet.models.context import GitState


class TestContextBuilder:
    """Tests for ContextBuilder."""

    def test_build_uses_vcs_query(self, context_builder, git_state):
        """The VCS query result becomes the git section."""
        context = context_builder.build(env={}, params={})

        assert context.git == git_state

    def test_env_and_params_are_copied(self, context_builder):
        """Environment and parameters are snapshot copies."""
        env = {"CI": "true"}
        params = {"release.name": "candidate"}

        context = context_builder.build(env=env, params=params)
        env["CI"] = "false"
        params.clear()

        assert context.env == {"CI": "true"}
        assert context.params == {"release.name": "candidate"}

    def test_process_environment_by_default(self, context_builder, monkeypatch):
        """Without an explicit env the process environment is used."""
        monkeypatch.setenv("HELMET_TEST_VALUE", "present")

        context = context_builder.build()

        assert context.env["HELMET_TEST_VALUE"] == "present"

    def test_vcs_failure_degrades_to_empty_state(self):
        """A failing VCS query yields an empty git state."""
        async def broken(path):
            raise OSError("git exploded")

        context = ContextBuilder(vcs_query=broken).build(env={})

        assert context.git == GitState()

    def test_query_receives_path(self, tmp_path):
        """The configured path is handed to the VCS query."""
        seen = []

        async def query(path):
            seen.append(path)
            return GitState()

        ContextBuilder(path=tmp_path, vcs_query=query).build(env={})

        assert seen == [tmp_path]

    def test_variables_layer_scopes(self, template_context):
        """variables() returns a fresh mapping with scopes on top."""
        variables = template_context.variables(project="api")

        assert variables["project"] == "api"
        assert variables["git"]["branch"] == "main"
        variables["env"]["CI"] = "false"
        assert template_context.env["CI"] == "true"


def test_utc_timestamp_format():
    """Timestamps are ISO-8601 UTC with milliseconds."""
    now = datetime(2024, 1, 20, 10, 30, 0, 123456, tzinfo=timezone.utc)

    assert utc_timestamp(now) == "2024-01-20T10:30:00.123Z"
    assert re.match(r"^\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z$", utc_timestamp())
