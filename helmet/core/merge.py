"""Typed merge rules for descriptor entities

Every function returns a new value and leaves its inputs untouched. The
later argument always has precedence.

Per-field rules:
    - scalar fields (``Options`` flags and templates, ``Image`` name and
      context, ``Deployment`` chart/namespace/release/recreate): the later
      value wins unless it is ``None`` (unset)
    - free-form mappings (``metadata``, ``values``, ``sync``): merged with
      ``deep_merge``
    - named collections (``projects``, ``deployments``): keys are unioned,
      entries present on both sides are merged recursively; base keys keep
      their position and new keys are appended
    - lists anywhere: replaced wholesale, never merged element-wise
"""

import copy
from typing import Any, Callable, Dict, Optional, TypeVar

from ..models.document import Deployment, Image, Options, Profile, Project

T = TypeVar('T')


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge two free-form mappings

    Args:
        base: Lower-precedence mapping
        override: Higher-precedence mapping

    Returns:
        New merged mapping
    """
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def _pick(base: Any, override: Any) -> Any:
    return base if override is None else override


def _merge_named(base: Dict[str, T],
                 override: Dict[str, T],
                 merge: Callable[[T, T], T]) -> Dict[str, T]:
    result = {name: copy.deepcopy(entry) for name, entry in base.items()}
    for name, entry in override.items():
        if name in result:
            result[name] = merge(result[name], entry)
        else:
            result[name] = copy.deepcopy(entry)
    return result


def merge_options(base: Options, override: Options) -> Options:
    """Merge profile options field by field"""
    return Options(
        push=_pick(base.push, override.push),
        cleanup=_pick(base.cleanup, override.cleanup),
        forward=_pick(base.forward, override.forward),
        repository=_pick(base.repository, override.repository),
        tag=_pick(base.tag, override.tag),
        namespace=_pick(base.namespace, override.namespace),
        release=_pick(base.release, override.release),
    )


def merge_image(base: Optional[Image], override: Optional[Image]) -> Optional[Image]:
    """Merge image definitions; a missing side yields a copy of the other"""
    if base is None or override is None:
        return copy.deepcopy(override if base is None else base)
    return Image(
        name=_pick(base.name, override.name),
        context=_pick(base.context, override.context),
        fqin=_pick(base.fqin, override.fqin),
    )


def merge_deployment(base: Deployment, override: Deployment) -> Deployment:
    """Merge two definitions of the same deployment"""
    return Deployment(
        name=base.name,
        chart=_pick(base.chart, override.chart),
        namespace=_pick(base.namespace, override.namespace),
        release=_pick(base.release, override.release),
        recreate=_pick(base.recreate, override.recreate),
        values=deep_merge(base.values, override.values),
    )


def merge_project(base: Project, override: Project) -> Project:
    """Merge two definitions of the same project"""
    if base.sync is None or override.sync is None:
        sync = copy.deepcopy(override.sync if base.sync is None else base.sync)
    else:
        sync = deep_merge(base.sync, override.sync)

    return Project(
        name=base.name,
        image=merge_image(base.image, override.image),
        sync=sync,
        deployments=_merge_named(base.deployments, override.deployments, merge_deployment),
        values=deep_merge(base.values, override.values),
    )


def merge_profile(base: Profile, override: Profile, name: Optional[str] = None) -> Profile:
    """
    Merge two profiles

    Args:
        base: Lower-precedence profile
        override: Higher-precedence profile
        name: Name attached to the result (defaults to the override's name)

    Returns:
        New merged profile
    """
    return Profile(
        name=name if name is not None else override.name,
        default=_pick(base.default, override.default),
        options=merge_options(base.options, override.options),
        metadata=deep_merge(base.metadata, override.metadata),
        projects=_merge_named(base.projects, override.projects, merge_project),
    )
