# helmet/core/toolchain.py
"""External tool presence and version checks"""

import logging
import re
import subprocess
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from ..api.exceptions import ToolchainError
from ..constants import TOOLCHAIN_REQUIREMENTS

Requirement = Tuple[str, List[str], str, str]


@dataclass
class ToolStatus:
    """Result of checking one external tool"""
    command: str
    requirement: str
    installed: bool = False
    version: Optional[str] = None
    satisfied: Optional[bool] = None  # None when the version could not be parsed
    output: str = ""

    @property
    def message(self) -> str:
        """Human-readable status line"""
        if not self.installed:
            return f"You must have {self.command} installed and working."
        if self.version is None:
            return f"Cannot detect {self.command} version"
        if self.satisfied is None:
            return f"Couldn't parse {self.command} version {self.version}"
        if not self.satisfied:
            return f"{self.command} version {self.version} doesn't satisfy \"{self.requirement}\""
        return f"{self.command} {self.version}"


class ToolchainChecker:
    """Check kubectl, helm and skaffold before invoking them"""

    def __init__(self,
                 requirements: Sequence[Requirement] = TOOLCHAIN_REQUIREMENTS,
                 runner: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        """Initialize checker

        Args:
            requirements: (command, version args, version regex, specifier) tuples
            runner: Callable with the ``subprocess.run`` signature
        """
        self.requirements = list(requirements)
        self.runner = runner
        self.logger = logging.getLogger("ToolchainChecker")

    def check(self, command: str, args: List[str], pattern: str, requirement: str) -> ToolStatus:
        """
        Check a single tool

        Args:
            command: Executable name
            args: Arguments printing the version
            pattern: Regex whose first group captures the version
            requirement: PEP 440 specifier the version must satisfy

        Returns:
            ToolStatus
        """
        status = ToolStatus(command=command, requirement=requirement)

        try:
            result = self.runner([command] + args, capture_output=True, text=True)
        except (FileNotFoundError, PermissionError) as e:
            status.output = str(e)
            return status

        status.output = (result.stdout or "") + (result.stderr or "")
        if result.returncode != 0:
            return status
        status.installed = True

        match = re.search(pattern, result.stdout or "")
        if not match:
            return status
        status.version = match.group(1)

        try:
            version = Version(status.version)
        except InvalidVersion:
            return status

        status.satisfied = SpecifierSet(requirement).contains(version, prereleases=True)
        return status

    def check_all(self) -> List[ToolStatus]:
        """Check every configured tool"""
        return [self.check(*requirement) for requirement in self.requirements]

    def ensure(self) -> List[ToolStatus]:
        """
        Check every tool and fail on missing or incompatible ones

        Undetectable versions only produce a warning.

        Returns:
            List of ToolStatus

        Raises:
            ToolchainError: On the first missing or incompatible tool
        """
        statuses = self.check_all()
        for status in statuses:
            if not status.installed or status.satisfied is False:
                raise ToolchainError(status.message, status.command)
            if status.satisfied is None:
                self.logger.warning(status.message)
            else:
                self.logger.debug(status.message)
        return statuses
