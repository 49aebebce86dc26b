"""
Tests for helmet.services.skaffold_service.
"""

import subprocess

import pytest

from helmet.services.resolution_service import ResolutionService
from helmet.services.skaffold_service import SkaffoldService


class RecordingRunner:
    """Stand-in for subprocess.run recording every call."""

    def __init__(self, failing=()):
        self.calls = []
        self.failing = set(failing)

    def __call__(self, args, **kwargs):
        self.calls.append((list(args), kwargs))
        returncode = 1 if args[0] in self.failing else 0
        return subprocess.CompletedProcess(args, returncode)


@pytest.fixture
def resolution(tmp_path, context_builder, descriptor, write_descriptor):
    descriptor["profiles"]["ci"]["projects"]["api"]["deployments"]["worker"] = {
        "chart": "./worker", "namespace": "jobs",
    }
    write_descriptor(descriptor)
    return ResolutionService(cwd=tmp_path, context_builder=context_builder).resolve()


class TestSkaffoldService:
    """Tests for SkaffoldService."""

    def test_dev_pipes_configuration(self, resolution):
        """skaffold dev receives the YAML on stdin with profile flags."""
        runner = RecordingRunner()

        result = SkaffoldService(runner=runner).dev(resolution)

        args, kwargs = runner.calls[0]
        assert result.success
        assert args == [
            "skaffold", "dev", "--filename", "-", "--cleanup=false", "--port-forward=true",
        ]
        assert kwargs["input"] == resolution.to_yaml()

    def test_default_repo(self, resolution):
        """A repository option is passed as --default-repo."""
        resolution.profile.options.repository = "registry.example.com/team"

        args = SkaffoldService().deploy_args(resolution)

        assert args == [
            "skaffold", "deploy", "--filename", "-",
            "--default-repo", "registry.example.com/team",
        ]

    def test_dry_run_executes_nothing(self, resolution):
        """Dry runs never call the runner."""
        runner = RecordingRunner()

        result = SkaffoldService(runner=runner).deploy(resolution, dry_run=True)

        assert runner.calls == []
        assert result.executed is False

    def test_destroy(self, resolution):
        """Every release is purged, namespaces on request."""
        runner = RecordingRunner()

        result = SkaffoldService(runner=runner).destroy(resolution, with_namespace=True)

        assert result.success
        assert [args for args, _ in runner.calls] == [
            ["helm", "delete", "primary", "--purge"],
            ["kubectl", "delete", "ns", "ns"],
            ["helm", "delete", "worker", "--purge"],
            ["kubectl", "delete", "ns", "jobs"],
        ]

    def test_destroy_continues_after_failure(self, resolution):
        """A failed delete does not stop the remaining releases."""
        runner = RecordingRunner(failing=["helm"])

        result = SkaffoldService(runner=runner).destroy(resolution)

        assert len(runner.calls) == 2
        assert len(result.failed) == 2
        assert not result.success

    def test_missing_executable(self, resolution):
        """A missing skaffold binary is reported as status 127."""
        def runner(args, **kwargs):
            raise FileNotFoundError(args[0])

        result = SkaffoldService(runner=runner).dev(resolution)

        assert result.returncode == 127
