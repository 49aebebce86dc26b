"""
Tests for helmet.core.toolchain.
"""

import subprocess

import pytest

from helmet.api.exceptions import ToolchainError
from helmet.core.toolchain import ToolchainChecker

KUBECTL_OUTPUT = 'Client Version: version.Info{Major:"1", Minor:"13", GitVersion:"v1.13.4", GitCommit:"c27b913"}\n'
HELM_OUTPUT = 'Client: &version.Version{SemVer:"v2.13.0", GitCommit:"79d0794", GitTreeState:"clean"}\n'
SKAFFOLD_OUTPUT = "v0.22.0\n"


def fake_runner(outputs):
    """Runner returning canned output per command; missing commands raise."""
    def run(args, **kwargs):
        command = args[0]
        if command not in outputs:
            raise FileNotFoundError(command)
        stdout, returncode = outputs[command]
        return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr="")

    return run


@pytest.fixture
def healthy():
    return {
        "kubectl": (KUBECTL_OUTPUT, 0),
        "helm": (HELM_OUTPUT, 0),
        "skaffold": (SKAFFOLD_OUTPUT, 0),
    }


class TestToolchainChecker:
    """Tests for ToolchainChecker."""

    def test_all_satisfied(self, healthy):
        """Supported versions pass."""
        statuses = ToolchainChecker(runner=fake_runner(healthy)).ensure()

        assert [(status.command, status.version) for status in statuses] == [
            ("kubectl", "1.13.4"),
            ("helm", "2.13.0"),
            ("skaffold", "0.22.0"),
        ]
        assert all(status.satisfied for status in statuses)

    def test_missing_tool(self, healthy):
        """A missing executable fails with a clear message."""
        del healthy["helm"]

        with pytest.raises(ToolchainError) as excinfo:
            ToolchainChecker(runner=fake_runner(healthy)).ensure()

        assert excinfo.value.command == "helm"
        assert excinfo.value.message == "You must have helm installed and working."

    def test_failing_tool_counts_as_missing(self, healthy):
        """A non-zero exit status means the tool is not working."""
        healthy["kubectl"] = ("", 1)

        status = ToolchainChecker(runner=fake_runner(healthy)).check_all()[0]

        assert status.installed is False

    def test_unsupported_version(self, healthy):
        """Versions outside the range fail."""
        healthy["helm"] = ('Version:"v3.1.0"', 0)

        with pytest.raises(ToolchainError, match="doesn't satisfy"):
            ToolchainChecker(runner=fake_runner(healthy)).ensure()

    def test_undetectable_version_warns(self, healthy, caplog):
        """An unrecognised version string only warns."""
        healthy["skaffold"] = ("unknown build\n", 0)

        statuses = ToolchainChecker(runner=fake_runner(healthy)).ensure()

        assert statuses[2].satisfied is None
        assert "Cannot detect skaffold version" in caplog.text

    def test_custom_requirements(self):
        """Requirements are configurable."""
        checker = ToolchainChecker(
            requirements=[("git", ["--version"], r"git version (\S+)", ">=2")],
            runner=fake_runner({"git": ("git version 2.39.2\n", 0)}),
        )

        assert checker.check_all()[0].satisfied is True
