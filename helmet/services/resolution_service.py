"""Descriptor resolution service"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..api.exceptions import DocumentError
from ..constants import DEFAULT_FILE, FALLBACK_FILE
from ..core.context_builder import ContextBuilder
from ..core.override_applier import OverrideApplier
from ..core.profile_resolver import ProfileResolver
from ..core.target_assembler import TargetAssembler
from ..core.template_engine import TemplateEngine
from ..core.validation_engine import DocumentValidator
from ..models.context import TemplateContext
from ..models.document import Profile
from ..models.overrides import CliOverrides
from ..models.target import TargetDocument


@dataclass
class Resolution:
    """Outcome of a full resolution"""
    profile: Profile
    target: TargetDocument
    context: TemplateContext

    def to_yaml(self) -> str:
        """Serialize the target document for Skaffold"""
        return yaml.safe_dump(self.target.to_dict(), default_flow_style=False, sort_keys=False)


def find_document_path(path: Optional[Path] = None, cwd: Optional[Path] = None) -> Path:
    """
    Locate the descriptor file

    An explicit path other than the default name is used as-is; otherwise
    ``helmet.yml`` is preferred when it exists, then ``helmet.yaml``.

    Args:
        path: Explicit descriptor path
        cwd: Directory to search

    Returns:
        Descriptor path (not checked for existence)
    """
    base = cwd or Path.cwd()
    if path is not None and Path(path).name != DEFAULT_FILE:
        return Path(path)
    if path is not None and Path(path).parent != Path("."):
        base = Path(path).parent

    fallback = base / FALLBACK_FILE
    if fallback.exists():
        return fallback
    return base / DEFAULT_FILE


def load_document(path: Path) -> Any:
    """
    Read a YAML or JSON descriptor

    Args:
        path: Descriptor path

    Returns:
        Parsed data

    Raises:
        DocumentError: If the file cannot be read or parsed
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Cannot read {path}: {e.strerror or e}", str(path)) from e

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DocumentError(f"Cannot parse {path}: {e}", str(path)) from e


class ResolutionService:
    """Run the full pipeline: validate, resolve, override, assemble"""

    def __init__(self,
                 cwd: Optional[Path] = None,
                 context_builder: Optional[ContextBuilder] = None,
                 template_engine: Optional[TemplateEngine] = None,
                 validator: Optional[DocumentValidator] = None):
        """Initialize resolution service

        Args:
            cwd: Working directory for descriptor lookup and git queries
            context_builder: Builder for the template context
            template_engine: Shared template engine
            validator: Shared document validator
        """
        self.cwd = cwd
        self.validator = validator or DocumentValidator()
        self.template_engine = template_engine or TemplateEngine()
        self.context_builder = context_builder or ContextBuilder(path=cwd)
        self.resolver = ProfileResolver(self.template_engine, self.validator)
        self.override_applier = OverrideApplier(self.validator)
        self.assembler = TargetAssembler(self.template_engine)
        self.logger = logging.getLogger("ResolutionService")

    def resolve_document(self,
                         raw: Any,
                         overrides: Optional[CliOverrides] = None,
                         env: Optional[Mapping[str, str]] = None) -> Resolution:
        """
        Resolve an already parsed descriptor

        Args:
            raw: Parsed descriptor data
            overrides: CLI overrides
            env: Environment mapping (defaults to the process environment)

        Returns:
            Resolution

        Raises:
            HelmetError: On any failure; nothing is partially produced
        """
        overrides = overrides or CliOverrides()

        document = self.validator.validate(raw)
        context = self.context_builder.build(env=env, params=overrides.params)

        profile = self.resolver.resolve(document, overrides.profile, context, overrides)
        profile = self.override_applier.apply(profile, overrides.projects)
        target = self.assembler.assemble(profile, context)

        return Resolution(profile=profile, target=target, context=context)

    def resolve(self,
                path: Optional[Path] = None,
                overrides: Optional[CliOverrides] = None,
                env: Optional[Mapping[str, str]] = None) -> Resolution:
        """
        Load and resolve a descriptor file

        Args:
            path: Descriptor path (``helmet.yaml`` lookup when omitted)
            overrides: CLI overrides
            env: Environment mapping

        Returns:
            Resolution
        """
        document_path = find_document_path(path, self.cwd)
        self.logger.info(f"Loading {document_path}")
        return self.resolve_document(load_document(document_path), overrides, env)
