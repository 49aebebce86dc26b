"""CLI context object"""

from typing import Optional

from ..core.toolchain import ToolchainChecker
from ..services import ResolutionService, SkaffoldService


class Context:
    """CLI context object with lazily created services

    Services are only built when a command asks for them, so commands
    such as ``version`` never touch git or the descriptor file. Tests
    may pass prebuilt services instead.
    """

    def __init__(self,
                 resolution_service: Optional[ResolutionService] = None,
                 skaffold_service: Optional[SkaffoldService] = None,
                 toolchain_checker: Optional[ToolchainChecker] = None):
        """Initialize CLI context"""
        self._resolution_service = resolution_service
        self._skaffold_service = skaffold_service
        self._toolchain_checker = toolchain_checker
        self.verbose: bool = False
        self.debug: bool = False

    @property
    def resolution_service(self) -> ResolutionService:
        """Get resolution service (lazy loading)"""
        if self._resolution_service is None:
            self._resolution_service = ResolutionService()
        return self._resolution_service

    @property
    def skaffold_service(self) -> SkaffoldService:
        """Get skaffold service (lazy loading)"""
        if self._skaffold_service is None:
            self._skaffold_service = SkaffoldService()
        return self._skaffold_service

    @property
    def toolchain_checker(self) -> ToolchainChecker:
        """Get toolchain checker (lazy loading)"""
        if self._toolchain_checker is None:
            self._toolchain_checker = ToolchainChecker()
        return self._toolchain_checker
