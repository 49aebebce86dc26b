"""Skaffold, Helm and kubectl invocation"""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from .resolution_service import Resolution


@dataclass
class CommandResult:
    """Outcome of one external command"""
    args: List[str]
    returncode: int = 0
    executed: bool = True

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.args)


@dataclass
class DestroyResult:
    """Outcome of tearing down every release of a profile"""
    commands: List[CommandResult] = field(default_factory=list)

    @property
    def failed(self) -> List[CommandResult]:
        return [command for command in self.commands if not command.success]

    @property
    def success(self) -> bool:
        return not self.failed


class SkaffoldService:
    """Feed a resolved configuration to Skaffold and clean up releases"""

    def __init__(self,
                 cwd: Optional[Path] = None,
                 runner: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        """Initialize skaffold service

        Args:
            cwd: Working directory for the spawned commands
            runner: Callable with the ``subprocess.run`` signature
        """
        self.cwd = cwd
        self.runner = runner
        self.logger = logging.getLogger("SkaffoldService")

    def dev_args(self, resolution: Resolution) -> List[str]:
        """Arguments for a continuous ``skaffold dev`` session"""
        options = resolution.profile.options
        args = [
            "skaffold", "dev",
            "--filename", "-",
            f"--cleanup={'true' if options.cleanup else 'false'}",
            f"--port-forward={'true' if options.forward else 'false'}",
        ]
        if options.repository:
            args += ["--default-repo", options.repository]
        return args

    def deploy_args(self, resolution: Resolution) -> List[str]:
        """Arguments for a one-shot ``skaffold deploy``"""
        args = ["skaffold", "deploy", "--filename", "-"]
        if resolution.profile.options.repository:
            args += ["--default-repo", resolution.profile.options.repository]
        return args

    def destroy_args(self, resolution: Resolution, with_namespace: bool = False) -> List[List[str]]:
        """
        Commands removing every release of the profile

        Args:
            resolution: Resolved configuration
            with_namespace: Also delete each release's namespace

        Returns:
            Argument lists in execution order
        """
        commands = []
        for release in resolution.target.releases:
            commands.append(["helm", "delete", release.name, "--purge"])
            if with_namespace:
                commands.append(["kubectl", "delete", "ns", release.namespace])
        return commands

    def dev(self, resolution: Resolution, dry_run: bool = False) -> CommandResult:
        """Run ``skaffold dev`` with the generated configuration on stdin"""
        return self._run(self.dev_args(resolution), resolution.to_yaml(), dry_run)

    def deploy(self, resolution: Resolution, dry_run: bool = False) -> CommandResult:
        """Run ``skaffold deploy`` with the generated configuration on stdin"""
        return self._run(self.deploy_args(resolution), resolution.to_yaml(), dry_run)

    def destroy(self,
                resolution: Resolution,
                with_namespace: bool = False,
                dry_run: bool = False) -> DestroyResult:
        """
        Delete every release, continuing past individual failures

        Args:
            resolution: Resolved configuration
            with_namespace: Also delete each release's namespace
            dry_run: Only report the commands

        Returns:
            DestroyResult with one entry per command
        """
        result = DestroyResult()
        for args in self.destroy_args(resolution, with_namespace):
            command = self._run(args, None, dry_run)
            if not command.success:
                self.logger.warning(f"{args[0]} {args[1]} failed: {command.command_line}")
            result.commands.append(command)
        return result

    def _run(self, args: List[str], stdin: Optional[str], dry_run: bool) -> CommandResult:
        if dry_run:
            self.logger.info(f"Dry run: {' '.join(args)}")
            return CommandResult(args=args, executed=False)

        self.logger.info(f"Running: {' '.join(args)}")
        try:
            completed = self.runner(args, input=stdin, text=True, cwd=self.cwd)
        except FileNotFoundError:
            self.logger.error(f"Command not found: {args[0]}")
            return CommandResult(args=args, returncode=127)

        return CommandResult(args=args, returncode=completed.returncode)
