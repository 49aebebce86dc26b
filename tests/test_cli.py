"""
Tests for the helmet command line interface.
"""

import subprocess

import pytest
import yaml
from click.testing import CliRunner
from rich.console import Console

from helmet.__version__ import __version__
from helmet.cli.context import Context
from helmet.cli.main import cli
from helmet.cli.utils import output
from helmet.core.toolchain import ToolchainChecker
from helmet.services import ResolutionService, SkaffoldService


class RecordingRunner:
    """Stand-in for subprocess.run recording every call."""

    def __init__(self, stdout="", returncode=0):
        self.calls = []
        self.stdout = stdout
        self.returncode = returncode

    def __call__(self, args, **kwargs):
        self.calls.append((list(args), kwargs))
        return subprocess.CompletedProcess(args, self.returncode, stdout=self.stdout, stderr="")


def toolchain_runner(missing=(), overrides=None):
    outputs = {
        "kubectl": 'Client Version: version.Info{GitVersion:"v1.13.4"}',
        "helm": 'Client: &version.Version{SemVer:"v2.13.0"}',
        "skaffold": "v0.22.0",
    }
    outputs.update(overrides or {})

    def run(args, **kwargs):
        if args[0] in missing:
            raise FileNotFoundError(args[0])
        return subprocess.CompletedProcess(args, 0, stdout=outputs[args[0]], stderr="")

    return run


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    """Keep YAML output undecorated regardless of the terminal."""
    monkeypatch.setattr(output, "console", Console(force_terminal=False))


@pytest.fixture
def skaffold_runner():
    return RecordingRunner()


@pytest.fixture
def make_context(tmp_path, context_builder, skaffold_runner):
    def make(missing_tools=(), tool_outputs=None):
        return Context(
            resolution_service=ResolutionService(cwd=tmp_path, context_builder=context_builder),
            skaffold_service=SkaffoldService(runner=skaffold_runner),
            toolchain_checker=ToolchainChecker(runner=toolchain_runner(missing_tools, tool_outputs)),
        )

    return make


@pytest.fixture
def invoke(make_context, descriptor, write_descriptor):
    """Invoke the CLI against a descriptor written to tmp_path."""
    def run(*args, missing_tools=(), tool_outputs=None, data=None):
        path = write_descriptor(descriptor if data is None else data)
        argv = list(args)
        if argv and argv[0] in ("wear", "deploy", "destroy", "skaffold"):
            argv[1:1] = ["--file", str(path)]
        return CliRunner().invoke(cli, argv, obj=make_context(missing_tools, tool_outputs))

    return run


class TestSkaffoldCommand:
    """Tests for helmet skaffold."""

    def test_prints_configuration(self, invoke):
        """The generated configuration is printed as YAML."""
        result = invoke("skaffold")

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(result.output)
        assert data["apiVersion"] == "skaffold/v1beta4"
        assert data["deploy"]["helm"]["releases"][0]["namespace"] == "ns"

    def test_dotted_overrides(self, invoke):
        """Dotted extra arguments override options and projects."""
        result = invoke(
            "skaffold",
            "--option.push=false",
            "--project.api.image.context", "./services/api",
        )

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(result.output)
        assert data["build"]["local"]["push"] is False
        assert data["build"]["artifacts"][0]["context"] == "./services/api"

    def test_resolution_error(self, invoke, descriptor):
        """Helmet errors are printed and exit with status 1."""
        descriptor["profiles"]["ci"]["default"] = False

        result = invoke("skaffold", data=descriptor)

        assert result.exit_code == 1
        assert "No default profile found." in result.output

    def test_schema_errors_are_listed(self, invoke, descriptor):
        """Every schema violation is printed."""
        descriptor["profiles"]["ci"]["options"]["push"] = "often"
        descriptor["profiles"]["ci"]["options"]["forward"] = "never"

        result = invoke("skaffold", data=descriptor)

        assert result.exit_code == 1
        assert "profiles.ci.options.push" in result.output
        assert "profiles.ci.options.forward" in result.output

    def test_unknown_profile(self, invoke):
        """An unknown --profile is reported."""
        result = invoke("skaffold", "--profile", "prod")

        assert result.exit_code == 1
        assert 'Missing profile definition for "prod"' in result.output

    def test_positional_argument_is_rejected(self, invoke):
        """Stray positional arguments are a usage error."""
        result = invoke("skaffold", "stray")

        assert result.exit_code == 2


class TestRunCommands:
    """Tests for wear, deploy and destroy."""

    def test_wear_dry_run(self, invoke, skaffold_runner):
        """A dry run prints the command and runs nothing."""
        result = invoke("wear", "--dry-run")

        assert result.exit_code == 0, result.output
        assert "skaffold dev --filename - --cleanup=false --port-forward=true" in result.output
        assert skaffold_runner.calls == []

    def test_deploy_runs_skaffold(self, invoke, skaffold_runner):
        """deploy pipes the configuration into skaffold deploy."""
        result = invoke("deploy")

        assert result.exit_code == 0, result.output
        args, kwargs = skaffold_runner.calls[0]
        assert args == ["skaffold", "deploy", "--filename", "-"]
        assert yaml.safe_load(kwargs["input"])["kind"] == "Config"

    def test_deploy_propagates_exit_status(self, invoke, skaffold_runner):
        """A failing skaffold run fails the command with its status."""
        skaffold_runner.returncode = 3

        result = invoke("deploy")

        assert result.exit_code == 3

    def test_missing_tool(self, invoke, skaffold_runner):
        """Commands refuse to run without the toolchain."""
        result = invoke("wear", missing_tools=("skaffold",))

        assert result.exit_code == 1
        assert "You must have skaffold installed and working." in result.output
        assert skaffold_runner.calls == []

    def test_destroy_with_namespace(self, invoke, skaffold_runner):
        """destroy purges releases and optionally namespaces."""
        result = invoke("destroy", "--with-namespace")

        assert result.exit_code == 0, result.output
        assert [args for args, _ in skaffold_runner.calls] == [
            ["helm", "delete", "primary", "--purge"],
            ["kubectl", "delete", "ns", "ns"],
        ]


class TestInformationCommands:
    """Tests for doctor and version."""

    def test_doctor_passes(self, invoke):
        """A healthy toolchain passes."""
        result = invoke("doctor")

        assert result.exit_code == 0, result.output
        assert "All checks passed" in result.output

    def test_doctor_fails(self, invoke):
        """A missing tool fails the diagnostics."""
        result = invoke("doctor", missing_tools=("helm",))

        assert result.exit_code == 1
        assert "You must have helm installed and working." in result.output

    def test_doctor_warns_on_undetectable_version(self, invoke):
        """An unreadable version is reported as a warning, not a failure."""
        result = invoke("doctor", tool_outputs={"skaffold": "unknown build"})

        assert result.exit_code == 0, result.output
        assert "Cannot detect skaffold version" in result.output
        assert "All checks passed" in result.output

    def test_version(self, invoke):
        """version prints the package version."""
        result = invoke("version")

        assert result.exit_code == 0
        assert __version__ in result.output
