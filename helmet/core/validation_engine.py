# helmet/core/validation_engine.py
"""Validation engine for helmet descriptors"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator, validators

from .schema import DOCUMENT_SCHEMA
from ..api.exceptions import FieldError, SchemaError
from ..models.document import Document


@dataclass
class ValidationResult:
    """Validation result container"""
    is_valid: bool = True
    errors: List[FieldError] = field(default_factory=list)
    document: Optional[Dict[str, Any]] = None

    def add_error(self, path: str, message: str) -> None:
        """Add error message"""
        self.errors.append(FieldError(path, message))
        self.is_valid = False

    def __str__(self) -> str:
        """String representation"""
        if self.is_valid:
            return "✓ All validations passed"

        lines = ["Errors:"]
        for error in self.errors:
            lines.append(f"  ✗ {error}")
        return '\n'.join(lines)


def _extend_with_default(validator_class):
    """Extend a validator class to inject schema defaults while validating"""
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        if validator.is_type(instance, "object"):
            for name, subschema in properties.items():
                if "default" in subschema:
                    instance.setdefault(name, copy.deepcopy(subschema["default"]))

        yield from validate_properties(validator, properties, instance, schema)

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultingValidator = _extend_with_default(Draft7Validator)


def format_path(path) -> str:
    """Render a jsonschema error path as a dotted field path"""
    parts = [str(part) for part in path]
    return ".".join(parts) if parts else "<root>"


class DocumentValidator:
    """Validate raw descriptors against the document schema"""

    def __init__(self, schema: Optional[Dict[str, Any]] = None):
        """Initialize validator

        Args:
            schema: JSON schema (defaults to the built-in descriptor schema)
        """
        self.schema = schema or DOCUMENT_SCHEMA
        Draft7Validator.check_schema(self.schema)
        self.logger = logging.getLogger("DocumentValidator")

    def check(self, raw: Any) -> ValidationResult:
        """
        Validate without raising

        Every violation is collected, not only the first one.

        Args:
            raw: Parsed descriptor (YAML/JSON data)

        Returns:
            ValidationResult holding the defaulted copy when valid
        """
        result = ValidationResult()

        if raw is None:
            result.add_error("<root>", "Configuration is empty")
            return result

        instance = copy.deepcopy(raw)
        validator = DefaultingValidator(self.schema)

        errors = sorted(
            validator.iter_errors(instance),
            key=lambda error: [str(part) for part in error.absolute_path]
        )
        for error in errors:
            result.add_error(format_path(error.absolute_path), error.message)

        if result.is_valid:
            result.document = instance

        self.logger.debug(f"Validated descriptor: {len(result.errors)} error(s)")
        return result

    def check_fragment(self, data: Any, definition: str, path: str) -> List[FieldError]:
        """
        Check a partial value against one schema definition

        Used for command line overrides, which may legitimately omit
        required fields that the descriptor already provides.

        Args:
            data: Partial value
            definition: Name under ``definitions`` (e.g. ``IOptions``)
            path: Field path prefix used in error messages

        Returns:
            Field errors, excluding missing required properties
        """
        schema = {
            "$ref": f"#/definitions/{definition}",
            "definitions": self.schema["definitions"],
        }
        errors = []
        for error in Draft7Validator(schema).iter_errors(data):
            if error.validator == "required":
                continue
            suffix = format_path(error.absolute_path) if error.absolute_path else ""
            errors.append(FieldError(f"{path}.{suffix}" if suffix else path, error.message))
        return errors

    def validate(self, raw: Any) -> Document:
        """
        Validate a raw descriptor and build the document model

        Args:
            raw: Parsed descriptor (YAML/JSON data)

        Returns:
            Document built from the defaulted copy of ``raw``

        Raises:
            SchemaError: With every field-level violation
        """
        result = self.check(raw)
        if not result.is_valid:
            raise SchemaError(result.errors)
        return Document.from_dict(result.document)
