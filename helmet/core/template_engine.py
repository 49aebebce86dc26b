# helmet/core/template_engine.py
"""Template rendering for descriptor strings

Templates use Jinja2 syntax. On top of the standard filters the engine
provides:

    sha1, md5, sha256   hex digest of the value
    short(size=8)       first ``size`` characters
    safe                characters outside ``[A-Za-z0-9_-]`` become ``_``
    required            fails the render when the value is undefined

and two reference tags that fail loudly instead of rendering empty:

    {% meta build.commit %}   value at ``build.commit`` in profile metadata
    {% param release.name %}  value of the ``--release.name`` CLI parameter
"""

import json
import logging
from typing import Any, Callable, Dict, Mapping, Union

import jinja2
from jinja2 import nodes
from jinja2.ext import Extension

from ..api.exceptions import MissingMetadataError, MissingParameterError, TemplateError
from ..constants import SAFE_FILTER_PATTERN, SHORT_FILTER_SIZE
from ..models.context import TemplateContext
from ..utils.hash_utils import hash_text

TEMPLATE_MARKERS = ("{{", "{%", "{#")

_MISSING = object()


def _lookup(node: Any, path: str) -> Any:
    """Walk a dotted path through nested mappings; ``_MISSING`` if absent"""
    if isinstance(node, Mapping) and path in node:
        return node[path]

    for key in path.split("."):
        if isinstance(node, Mapping) and key in node:
            node = node[key]
        elif isinstance(node, (list, tuple)) and key.isdigit() and int(key) < len(node):
            node = node[int(key)]
        else:
            return _MISSING
    return node


def resolve_metadata(path: str, variables: Mapping[str, Any]) -> Any:
    """
    Resolve ``path`` against the metadata of the ``profile`` in scope

    Raises:
        MissingMetadataError: If the path does not exist
    """
    profile = variables.get("profile")
    if isinstance(profile, Mapping):
        metadata = profile.get("metadata")
    else:
        metadata = getattr(profile, "metadata", None)

    value = _lookup(metadata or {}, path)
    if value is _MISSING:
        raise MissingMetadataError(path)
    return value


def resolve_parameter(path: str, variables: Mapping[str, Any]) -> Any:
    """
    Resolve ``path`` against the flattened CLI parameters

    Raises:
        MissingParameterError: If no such parameter was given
    """
    params = variables.get("params") or {}
    if path not in params:
        raise MissingParameterError(path)
    return params[path]


# Tag name -> pure resolver(path, variables)
REFERENCE_RESOLVERS: Dict[str, Callable[[str, Mapping[str, Any]], Any]] = {
    "meta": resolve_metadata,
    "param": resolve_parameter,
}


class ReferenceExtension(Extension):
    """Jinja2 tags backed by ``REFERENCE_RESOLVERS``"""

    tags = set(REFERENCE_RESOLVERS)

    def parse(self, parser):
        token = next(parser.stream)
        tag = token.value
        lineno = token.lineno

        parts = []
        while parser.stream.current.type != "block_end":
            parts.append(str(next(parser.stream).value))
        path = "".join(parts)

        if not path:
            parser.fail(f"'{tag}' tag requires a dotted path", lineno)

        call = self.call_method(
            "_resolve",
            [nodes.Const(tag), nodes.Const(path), nodes.ContextReference()],
            lineno=lineno
        )
        return nodes.Output([call], lineno=lineno)

    def _resolve(self, tag: str, path: str, context) -> Any:
        return REFERENCE_RESOLVERS[tag](path, context)


def _text(value: Any) -> str:
    if value is None or isinstance(value, jinja2.Undefined):
        return ""
    return str(value)


def filter_short(value: Any, size: int = SHORT_FILTER_SIZE) -> str:
    """First ``size`` characters of the value"""
    return _text(value)[:size]


def filter_safe(value: Any) -> str:
    """Replace characters that are unsafe in DNS-label-like names"""
    return SAFE_FILTER_PATTERN.sub("_", _text(value))


def filter_required(value: Any) -> Any:
    """Fail the render when the value is undefined"""
    if value is None or isinstance(value, jinja2.Undefined):
        raise TemplateError("Required value missing.")
    return value


def _finalize(value: Any) -> Any:
    return "" if value is None else value


class TemplateEngine:
    """Render templates against a template context

    The engine holds no per-render state; the caller decides the order in
    which dependent fields are rendered.
    """

    def __init__(self):
        """Initialize the Jinja2 environment and register filters"""
        self.environment = jinja2.Environment(
            autoescape=False,
            keep_trailing_newline=True,
            finalize=_finalize,
            extensions=[ReferenceExtension],
        )
        self.environment.filters.update({
            "sha1": lambda value: hash_text(_text(value), "sha1"),
            "md5": lambda value: hash_text(_text(value), "md5"),
            "sha256": lambda value: hash_text(_text(value), "sha256"),
            "short": filter_short,
            "safe": filter_safe,
            "required": filter_required,
        })
        self.logger = logging.getLogger("TemplateEngine")

    @staticmethod
    def _variables(context: Union[TemplateContext, Mapping[str, Any], None],
                   scopes: Dict[str, Any]) -> Dict[str, Any]:
        if isinstance(context, TemplateContext):
            return context.variables(**scopes)
        variables = dict(context or {})
        variables.update(scopes)
        return variables

    def render(self,
               template: str,
               context: Union[TemplateContext, Mapping[str, Any], None] = None,
               **scopes: Any) -> str:
        """
        Render a single template string

        Args:
            template: Template source
            context: Template context or plain variable mapping
            **scopes: Extra variables (``profile``, ``project``, ...)

        Returns:
            Rendered string; input without template syntax is returned as-is

        Raises:
            TemplateError: On syntax errors or failed references
        """
        if not any(marker in template for marker in TEMPLATE_MARKERS):
            return template

        variables = self._variables(context, scopes)

        try:
            return self.environment.from_string(template).render(variables)
        except TemplateError as e:
            if e.template is None:
                e.template = template
            raise
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(f"Invalid template syntax: {e.message}", template) from e
        except jinja2.TemplateError as e:
            raise TemplateError(f"Failed to render template: {e}", template) from e
        except (TypeError, ValueError, ArithmeticError) as e:
            raise TemplateError(f"Failed to render template: {e}", template) from e

    def render_deep(self,
                    value: Any,
                    context: Union[TemplateContext, Mapping[str, Any], None] = None,
                    convert: bool = False,
                    **scopes: Any) -> Any:
        """
        Render every string leaf of a nested structure

        Args:
            value: String, mapping, sequence or scalar
            context: Template context or plain variable mapping
            convert: JSON-decode rendered strings when they parse
            **scopes: Extra variables (``profile``, ``project``, ...)

        Returns:
            A new structure; the input is not modified
        """
        if isinstance(value, str):
            rendered = self.render(value, context, **scopes)
            if convert:
                try:
                    return json.loads(rendered)
                except ValueError:
                    return rendered
            return rendered

        if isinstance(value, Mapping):
            return {
                key: self.render_deep(item, context, convert, **scopes)
                for key, item in value.items()
            }

        if isinstance(value, (list, tuple)):
            return [self.render_deep(item, context, convert, **scopes) for item in value]

        return value
