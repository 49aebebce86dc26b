"""
Tests for helmet.services.resolution_service.
"""

import pytest
import yaml

from helmet.api.exceptions import DocumentError, OverrideError, SchemaError
from helmet.services.resolution_service import (
    ResolutionService,
    find_document_path,
    load_document,
)
from helmet.utils.argv_utils import build_overrides


@pytest.fixture
def service(tmp_path, context_builder):
    return ResolutionService(cwd=tmp_path, context_builder=context_builder)


class TestEndToEnd:
    """Full resolution from a descriptor file."""

    def test_base_and_ci_profiles(self, service, descriptor, write_descriptor):
        """Base cleanup and ci push both reach the resolved configuration."""
        write_descriptor(descriptor)

        resolution = service.resolve()

        assert resolution.profile.name == "ci"
        assert resolution.profile.options.cleanup is False
        assert resolution.profile.options.push is True

        target = resolution.target.to_dict()
        assert target["build"]["local"]["push"] is True
        assert [artifact["image"] for artifact in target["build"]["artifacts"]] == ["api"]
        assert target["build"]["artifacts"][0]["context"] == "./api"

        releases = target["deploy"]["helm"]["releases"]
        assert len(releases) == 1
        assert releases[0]["namespace"] == "ns"
        assert releases[0]["chartPath"] == "./chart"
        assert releases[0]["name"] == "primary"

    def test_cli_overrides(self, service, descriptor, write_descriptor):
        """Options, project partials and parameters flow through."""
        descriptor["profiles"]["ci"]["projects"]["api"]["deployments"]["primary"]["values"] = {
            "release": "{% param release.name %}",
        }
        write_descriptor(descriptor)
        overrides = build_overrides([
            "--option.repository=registry.example.com/team",
            "--option.tag=v2",
            "--project.api.image.context=./services/api",
            "--release.name=candidate",
        ])

        resolution = service.resolve(overrides=overrides)

        api = resolution.profile.projects["api"]
        assert api.image.context == "./services/api"
        assert api.image.fqin == "registry.example.com/team/api:v2"
        assert resolution.target.releases[0].overrides == {"release": "candidate"}
        assert resolution.target.tag == "v2"

    def test_unmatched_override_produces_nothing(self, service, descriptor, write_descriptor):
        """Any failure aborts the whole resolution."""
        write_descriptor(descriptor)

        with pytest.raises(OverrideError):
            service.resolve(overrides=build_overrides(["--project.db.image.name=db"]))

    def test_yaml_output(self, service, descriptor, write_descriptor):
        """to_yaml emits the Skaffold document in key order."""
        write_descriptor(descriptor)

        text = service.resolve().to_yaml()

        assert text.startswith("apiVersion: skaffold/v1beta4\nkind: Config\n")
        assert yaml.safe_load(text)["deploy"]["helm"]["releases"][0]["chartPath"] == "./chart"

    def test_schema_errors_surface(self, service, descriptor, write_descriptor):
        """Invalid descriptors raise SchemaError."""
        descriptor["profiles"]["ci"]["options"]["push"] = "often"
        write_descriptor(descriptor)

        with pytest.raises(SchemaError):
            service.resolve()


class TestDocumentLoading:
    """Tests for descriptor lookup and parsing."""

    def test_yml_fallback(self, tmp_path, descriptor, write_descriptor):
        """helmet.yml is used when present."""
        write_descriptor(descriptor, name="helmet.yml")

        assert find_document_path(None, tmp_path) == tmp_path / "helmet.yml"

    def test_default_name(self, tmp_path):
        """helmet.yaml is the default."""
        assert find_document_path(None, tmp_path) == tmp_path / "helmet.yaml"

    def test_explicit_path(self, tmp_path):
        """A custom file name is used as given."""
        path = tmp_path / "deploy.yaml"

        assert find_document_path(path, tmp_path) == path

    def test_missing_file(self, tmp_path):
        """An unreadable file raises DocumentError."""
        with pytest.raises(DocumentError, match="Cannot read"):
            load_document(tmp_path / "helmet.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Unparsable YAML raises DocumentError."""
        path = tmp_path / "helmet.yaml"
        path.write_text("profiles: [unclosed", encoding="utf-8")

        with pytest.raises(DocumentError, match="Cannot parse"):
            load_document(path)

    def test_json_descriptor(self, tmp_path):
        """JSON descriptors are accepted as YAML."""
        path = tmp_path / "helmet.json"
        path.write_text('{"profiles": {"ci": {"default": true}}}', encoding="utf-8")

        assert load_document(path) == {"profiles": {"ci": {"default": True}}}
