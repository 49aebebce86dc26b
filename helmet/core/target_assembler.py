# helmet/core/target_assembler.py
"""Skaffold configuration assembly"""

import copy
import logging
from dataclasses import replace
from typing import Optional

from .template_engine import TemplateEngine
from ..api.exceptions import MissingDeploymentFieldError
from ..models.context import TemplateContext
from ..models.document import Deployment, Profile, Project
from ..models.target import Artifact, Release, TargetDocument


class TargetAssembler:
    """Produce the target document from a fully resolved profile"""

    def __init__(self, template_engine: Optional[TemplateEngine] = None):
        """Initialize target assembler

        Args:
            template_engine: Engine used for namespace, release and values templates
        """
        self.template_engine = template_engine or TemplateEngine()
        self.logger = logging.getLogger("TargetAssembler")

    def assemble(self, profile: Profile, context: Optional[TemplateContext] = None) -> TargetDocument:
        """
        Build artifacts and releases in declaration order

        Args:
            profile: Profile with overrides applied and image names computed
            context: Template context

        Returns:
            TargetDocument

        Raises:
            MissingDeploymentFieldError: If a deployment has no chart, namespace or release name
            TemplateError: If a template fails to render
        """
        artifacts = []
        releases = []

        for project in profile.projects.values():
            if project.image is not None:
                artifacts.append(Artifact(
                    image=project.image.name,
                    context=project.image.context,
                    sync=copy.deepcopy(project.sync or {}),
                ))

            for deployment in project.deployments.values():
                releases.append(self.assemble_release(profile, project, deployment, context))

        self.logger.info(f"Assembled {len(artifacts)} artifact(s) and {len(releases)} release(s)")

        return TargetDocument(
            push=bool(profile.options.push),
            tag=profile.options.tag or "",
            artifacts=artifacts,
            releases=releases,
        )

    def assemble_release(self,
                         profile: Profile,
                         project: Project,
                         deployment: Deployment,
                         context: Optional[TemplateContext] = None) -> Release:
        """
        Render one deployment into a release entry

        The namespace is rendered first and stored on the deployment, so
        the release template can refer to ``deployment.namespace``.
        """
        if not deployment.chart:
            raise MissingDeploymentFieldError(project.name, deployment.name, "chart")

        options = profile.options

        if options.namespace:
            namespace = self.template_engine.render(
                options.namespace, context, profile=profile, project=project, deployment=deployment
            )
            deployment = replace(deployment, namespace=namespace)
        if not deployment.namespace:
            raise MissingDeploymentFieldError(project.name, deployment.name, "namespace")

        if options.release:
            release = self.template_engine.render(
                options.release, context, profile=profile, project=project, deployment=deployment
            )
        else:
            release = deployment.release or deployment.name
        deployment = replace(deployment, release=release)
        if not deployment.release:
            raise MissingDeploymentFieldError(project.name, deployment.name, "release name")

        overrides = self.template_engine.render_deep(
            deployment.values, context, convert=True,
            profile=profile, project=project, deployment=deployment
        )

        return Release(
            name=deployment.release,
            namespace=deployment.namespace,
            chart_path=deployment.chart,
            recreate=bool(deployment.recreate),
            overrides=overrides,
        )
