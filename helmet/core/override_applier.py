# helmet/core/override_applier.py
"""Pattern-keyed project overrides and image name computation"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Set

from .merge import deep_merge, merge_project
from .profile_resolver import check_project_image
from .validation_engine import DocumentValidator
from ..api.exceptions import OverrideError, SchemaError
from ..constants import IMAGE_NAME_UNSAFE_PATTERN, OVERRIDE_PROJECT_KEY, REGISTRY_PREFIX_PATTERN
from ..models.document import Profile, Project
from ..utils.pattern_utils import filter_names


def build_image_name(repository: str, image: str) -> str:
    """
    Compute the repository-qualified image name

    - no repository: the image is returned unchanged
    - registry repository (``host/project``): an image already under the
      repository is kept, an image under another registry project has that
      prefix substituted, anything else is prefixed
    - plain repository: the whole image name is flattened into one path
      segment (``/ . _ : @`` become ``_``) and prefixed

    Args:
        repository: Repository prefix from the profile options
        image: Original image name

    Returns:
        Image name without tag
    """
    if not repository:
        return image

    repository = repository.rstrip("/")

    if REGISTRY_PREFIX_PATTERN.match(repository + "/"):
        if image.startswith(repository + "/"):
            return image

        existing = REGISTRY_PREFIX_PATTERN.match(image)
        if existing:
            return f"{repository}/{image[existing.end():]}"
        return f"{repository}/{image}"

    return f"{repository}/{IMAGE_NAME_UNSAFE_PATTERN.sub('_', image)}"


class OverrideApplier:
    """Merge ``--project.<pattern>`` overrides into matching projects"""

    def __init__(self, validator: Optional[DocumentValidator] = None):
        """Initialize override applier

        Args:
            validator: Validator used to check override partials
        """
        self.validator = validator or DocumentValidator()
        self.logger = logging.getLogger("OverrideApplier")

    def apply(self, profile: Profile, project_overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> Profile:
        """
        Apply project overrides and compute image names

        Patterns are applied in insertion order, so a later pattern wins on
        fields an earlier one already set. Inside a partial, ``deployments``
        keys are patterns against the matched projects' deployment names.

        Args:
            profile: Resolved profile (tag already rendered)
            project_overrides: Partials keyed by project name pattern

        Returns:
            New profile with overrides merged and ``image.fqin`` set

        Raises:
            OverrideError: If a pattern matches nothing
            MissingProjectFieldError: If an image ends up without a name or context
            SchemaError: If a partial contains unknown or mistyped fields
        """
        projects = dict(profile.projects)

        for pattern, partial in (project_overrides or {}).items():
            self._check_partial(pattern, partial)

            matches = filter_names(projects, pattern)
            if not matches:
                raise OverrideError(pattern)

            deployment_patterns = set((partial.get("deployments") or {}).keys())
            matched_patterns: Set[str] = set()

            for name in matches:
                override, used = self._expand_partial(projects[name], partial)
                matched_patterns.update(used)
                projects[name] = merge_project(projects[name], override)
                self.logger.debug(f"Applied override '{pattern}' to project '{name}'")

            unmatched = sorted(deployment_patterns - matched_patterns)
            if unmatched:
                raise OverrideError(f"{pattern}.deployments.{unmatched[0]}", kind="deployment")

        options = profile.options
        for name, project in projects.items():
            check_project_image(name, project)
            if project.image is not None:
                image_name = build_image_name(options.repository or "", project.image.name)
                fqin = f"{image_name}:{options.tag}"
                projects[name] = replace(project, image=replace(project.image, fqin=fqin))

        return replace(profile, projects=projects)

    def _check_partial(self, pattern: str, partial: Dict[str, Any]) -> None:
        errors = self.validator.check_fragment(
            partial, "IProject", f"{OVERRIDE_PROJECT_KEY}.{pattern}"
        )
        if errors:
            raise SchemaError(errors)

    @staticmethod
    def _expand_partial(project: Project, partial: Dict[str, Any]):
        """Build the override project, resolving deployment patterns"""
        deployments = {}
        used = set()

        for deployment_pattern, deployment_partial in (partial.get("deployments") or {}).items():
            for deployment_name in filter_names(project.deployments, deployment_pattern):
                used.add(deployment_pattern)
                deployments[deployment_name] = deep_merge(
                    deployments.get(deployment_name, {}), deployment_partial or {}
                )

        data = dict(partial)
        data["deployments"] = deployments
        return Project.from_dict(project.name, data), used
