"""Dotted command line argument utilities

Arguments such as ``--option.push=false`` or ``--project.api.image.name web``
are collected into a nested dictionary. Values are coerced from their
YAML scalar form, so ``true``, ``3`` or ``1.5`` become typed values.
"""

from typing import Any, Dict, List

import yaml

from ..constants import OVERRIDE_METADATA_KEY, OVERRIDE_OPTION_KEY, OVERRIDE_PROJECT_KEY
from ..models.overrides import CliOverrides


def coerce_value(raw: str) -> Any:
    """
    Coerce a raw argument value to a scalar

    Args:
        raw: Raw command line value

    Returns:
        Parsed scalar, or the raw string when it does not parse to one
    """
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw

    if value is None and raw.strip() not in ("null", "~"):
        return raw
    if isinstance(value, (str, bool, int, float)) or value is None:
        return value
    return raw


def set_dotted(target: Dict[str, Any], dotted_key: str, value: Any) -> None:
    """Assign ``value`` inside ``target`` following a dotted key path"""
    keys = dotted_key.split(".")
    node = target
    for key in keys[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[keys[-1]] = value


def parse_dotted_arguments(args: List[str]) -> Dict[str, Any]:
    """
    Parse ``--a.b.c=value`` style arguments into a nested dictionary

    Supported forms are ``--key=value``, ``--key value``, ``--flag`` (true)
    and ``--no-flag`` (false).

    Args:
        args: Extra arguments left over by the command line parser

    Returns:
        Nested dictionary of parsed values

    Raises:
        ValueError: If a bare positional argument is found
    """
    result: Dict[str, Any] = {}
    index = 0

    while index < len(args):
        arg = args[index]
        index += 1

        if not arg.startswith("--") or len(arg) == 2:
            raise ValueError(f"Unexpected argument: {arg}")

        key = arg[2:]
        if "=" in key:
            key, raw = key.split("=", 1)
            value = coerce_value(raw)
        elif index < len(args) and not args[index].startswith("--"):
            value = coerce_value(args[index])
            index += 1
        elif key.startswith("no-"):
            key = key[3:]
            value = False
        else:
            value = True

        set_dotted(result, key, value)

    return result


def flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten a nested dictionary to dotted keys (leaves only)"""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict) and value:
            flat.update(flatten(value, dotted))
        else:
            flat[dotted] = value
    return flat


def build_overrides(args: List[str], profile: str = None) -> CliOverrides:
    """
    Build CLI overrides from extra command line arguments

    Args:
        args: Extra arguments (``--option.*``, ``--metadata.*``,
            ``--project.<pattern>.*`` and free parameters)
        profile: Explicit profile name

    Returns:
        CliOverrides instance

    Raises:
        ValueError: If an override namespace is given a scalar value
    """
    parsed = parse_dotted_arguments(args)

    sections = {}
    for key in (OVERRIDE_OPTION_KEY, OVERRIDE_METADATA_KEY, OVERRIDE_PROJECT_KEY):
        section = parsed.get(key, {})
        if not isinstance(section, dict):
            raise ValueError(f"--{key} expects dotted keys, e.g. --{key}.name=value")
        sections[key] = section

    for pattern, partial in sections[OVERRIDE_PROJECT_KEY].items():
        if not isinstance(partial, dict):
            raise ValueError(f"--{OVERRIDE_PROJECT_KEY}.{pattern} expects dotted keys")

    return CliOverrides(
        profile=profile,
        options=sections[OVERRIDE_OPTION_KEY],
        metadata=sections[OVERRIDE_METADATA_KEY],
        projects=sections[OVERRIDE_PROJECT_KEY],
        params=flatten(parsed),
    )
