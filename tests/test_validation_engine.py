"""
Tests for helmet.core.validation_engine.
"""

import pytest

from helmet.api.exceptions import SchemaError
from helmet.core.validation_engine import DocumentValidator, format_path


class TestDocumentValidator:
    """Tests for DocumentValidator."""

    def test_valid_descriptor_builds_document(self, descriptor):
        """A valid descriptor becomes a Document with all profiles."""
        document = DocumentValidator().validate(descriptor)

        assert list(document.profiles) == ["$base", "ci"]
        assert document.profiles["ci"].projects["api"].image.name == "api"

    def test_defaults_are_injected(self, descriptor):
        """Omitted default/options/metadata/projects receive schema defaults."""
        result = DocumentValidator().check(descriptor)

        base = result.document["profiles"]["$base"]
        assert base["default"] is False
        assert base["metadata"] == {}
        assert base["projects"] == {}

    def test_option_values_are_not_defaulted(self, descriptor):
        """Option values stay unset so a base profile can still provide them."""
        result = DocumentValidator().check(descriptor)

        assert result.document["profiles"]["ci"]["options"] == {"push": True}

    def test_input_is_not_modified(self, descriptor):
        """Default injection works on a copy."""
        DocumentValidator().check(descriptor)

        assert "metadata" not in descriptor["profiles"]["ci"]

    def test_all_errors_are_collected(self, descriptor):
        """Every violation is reported, not only the first one."""
        descriptor["profiles"]["ci"]["options"]["push"] = "yes"
        descriptor["profiles"]["ci"]["projects"]["api"]["image"].pop("name")
        descriptor["profiles"]["ci"]["colour"] = "blue"

        with pytest.raises(SchemaError) as excinfo:
            DocumentValidator().validate(descriptor)

        paths = [error.path for error in excinfo.value.errors]
        assert len(paths) == 3
        assert "profiles.ci.options.push" in paths
        assert "profiles.ci.projects.api.image" in paths
        assert "profiles.ci" in paths

    def test_error_messages_list_each_field(self, descriptor):
        """SchemaError messages start with a summary followed by field errors."""
        descriptor["profiles"]["ci"]["default"] = "true"

        with pytest.raises(SchemaError) as excinfo:
            DocumentValidator().validate(descriptor)

        messages = excinfo.value.messages
        assert messages[0].startswith("Failed to validate configuration format")
        assert messages[1].startswith("profiles.ci.default: ")

    def test_profiles_are_required(self):
        """A descriptor without profiles is rejected."""
        result = DocumentValidator().check({})

        assert not result.is_valid
        assert result.errors[0].path == "<root>"

    def test_empty_descriptor(self):
        """An empty file is reported, not crashed on."""
        result = DocumentValidator().check(None)

        assert not result.is_valid
        assert "empty" in result.errors[0].message

    def test_check_fragment_ignores_required(self):
        """Partial overrides may omit required fields."""
        errors = DocumentValidator().check_fragment(
            {"image": {"context": "./web"}}, "IProject", "project.api"
        )

        assert errors == []

    def test_check_fragment_reports_prefixed_paths(self):
        """Fragment errors carry the override path prefix."""
        errors = DocumentValidator().check_fragment({"push": "maybe"}, "IOptions", "option")

        assert [error.path for error in errors] == ["option.push"]

    def test_check_fragment_rejects_unknown_fields(self):
        """Unknown option names are rejected."""
        errors = DocumentValidator().check_fragment({"pull": True}, "IOptions", "option")

        assert len(errors) == 1
        assert errors[0].path == "option"


def test_format_path():
    """Paths are dotted; the empty path is the root."""
    assert format_path(["profiles", "ci", "default"]) == "profiles.ci.default"
    assert format_path([]) == "<root>"
