# helmet/core/profile_resolver.py
"""Profile selection and cascading"""

import logging
from dataclasses import replace
from typing import Optional

from .merge import deep_merge, merge_options, merge_profile
from .template_engine import TemplateEngine
from .validation_engine import DocumentValidator
from ..api.exceptions import (
    MissingProjectFieldError,
    NoDefaultProfileError,
    ProfileNotFoundError,
    SchemaError,
)
from ..constants import BASE_PROFILE_SIGIL, DEFAULT_OPTIONS, OVERRIDE_OPTION_KEY
from ..models.context import TemplateContext
from ..models.document import Document, Options, Profile, Project
from ..models.overrides import CliOverrides


def check_project_image(name: str, project: Project) -> None:
    """
    Ensure an image block carries both a name and a build context

    Raises:
        MissingProjectFieldError: If either field is missing
    """
    if project.image is None:
        return
    if not project.image.name:
        raise MissingProjectFieldError(name, "image.name")
    if not project.image.context:
        raise MissingProjectFieldError(name, "image.context")


class ProfileResolver:
    """Select the active profile and merge its layers

    Precedence, lowest first: built-in option defaults, base profile,
    named profile, ``--option``/``--metadata`` overrides.
    """

    def __init__(self,
                 template_engine: Optional[TemplateEngine] = None,
                 validator: Optional[DocumentValidator] = None):
        """Initialize profile resolver

        Args:
            template_engine: Engine used to render the tag template
            validator: Validator used to check option overrides
        """
        self.template_engine = template_engine or TemplateEngine()
        self.validator = validator or DocumentValidator()
        self.logger = logging.getLogger("ProfileResolver")

    def find_base_profile(self, document: Document) -> Profile:
        """First base profile, or an empty one when the document has none"""
        base_profile = document.find_base_profile()
        if base_profile is None:
            self.logger.warning("No base profile found. No variables to override.")
            return Profile(name=BASE_PROFILE_SIGIL)
        return base_profile

    def select_profile_name(self, document: Document, requested: Optional[str] = None) -> str:
        """
        Determine the active profile name

        Args:
            document: Validated document
            requested: Explicitly requested profile name

        Returns:
            Name of an existing, selectable profile

        Raises:
            NoDefaultProfileError: If no profile is flagged default
            ProfileNotFoundError: If the chosen profile is not defined or is a base profile
        """
        default_profile = document.find_default_profile()
        if default_profile is None:
            raise NoDefaultProfileError()

        name = requested or default_profile.name
        profile = document.profiles.get(name)
        if profile is None or profile.is_base:
            raise ProfileNotFoundError(name)
        return name

    def resolve(self,
                document: Document,
                requested: Optional[str] = None,
                context: Optional[TemplateContext] = None,
                overrides: Optional[CliOverrides] = None) -> Profile:
        """
        Resolve the active profile

        Args:
            document: Validated document
            requested: Explicit profile name, or None for the default profile
            context: Template context used to render the tag
            overrides: CLI overrides; only options and metadata apply here

        Returns:
            New merged profile with its tag rendered

        Raises:
            ResolutionError: On missing default/named profile or project fields
            SchemaError: If option overrides are invalid
            TemplateError: If the tag template fails to render
        """
        base_profile = self.find_base_profile(document)
        name = self.select_profile_name(document, requested)
        self.logger.info(f"Resolving profile '{name}'")

        builtin = Profile(name=name, options=Options.from_dict(DEFAULT_OPTIONS))
        profile = merge_profile(builtin, base_profile, name=name)
        profile = merge_profile(profile, document.profiles[name], name=name)

        if overrides is not None:
            profile = self._apply_cli_values(profile, overrides)

        # Resolution marker, not a deploy-time option
        profile = replace(profile, default=None)

        tag = self.template_engine.render(profile.options.tag or "", context, profile=profile)
        profile = replace(profile, options=replace(profile.options, tag=tag))
        self.logger.debug(f"Rendered tag: {tag}")

        projects = {}
        for project_name, project in profile.projects.items():
            projects[project_name] = self._check_project(project_name, project)

        return replace(profile, projects=projects)

    def _apply_cli_values(self, profile: Profile, overrides: CliOverrides) -> Profile:
        errors = self.validator.check_fragment(overrides.options, "IOptions", OVERRIDE_OPTION_KEY)
        if errors:
            raise SchemaError(errors)

        return replace(
            profile,
            options=merge_options(profile.options, Options.from_dict(overrides.options)),
            metadata=deep_merge(profile.metadata, overrides.metadata),
        )

    @staticmethod
    def _check_project(name: str, project: Project) -> Project:
        check_project_image(name, project)
        return replace(project, name=name, values=project.values or {})
