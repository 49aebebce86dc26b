"""Global constants for helmet"""

import re

APP_NAME = "helmet"
LOG_FORMAT = "%(message)s"

# Descriptor files
DEFAULT_FILE = "helmet.yaml"
FALLBACK_FILE = "helmet.yml"

# Profiles
BASE_PROFILE_SIGIL = "$"

# Templates
DEFAULT_TAG_TEMPLATE = (
    "{{ (git.tag or git.commit or '') | short }}"
    "{% if git.dirty %}-dirty{% endif %}"
)
DEFAULT_RELEASE_TEMPLATE = "{{ deployment.release or deployment.name }}"
DEFAULT_NAMESPACE_TEMPLATE = "{{ deployment.namespace or '' }}"
SHORT_FILTER_SIZE = 8
SAFE_FILTER_PATTERN = re.compile(r"[^a-zA-Z0-9_-]")

# Built-in option values, the lowest merge layer
DEFAULT_OPTIONS = {
    "push": True,
    "cleanup": True,
    "forward": True,
    "repository": "",
    "tag": DEFAULT_TAG_TEMPLATE,
    "namespace": DEFAULT_NAMESPACE_TEMPLATE,
    "release": DEFAULT_RELEASE_TEMPLATE,
}

# Image names
REGISTRY_PREFIX_PATTERN = re.compile(
    r"^(?:localhost(?::\d+)?|[a-zA-Z0-9-]+(?:\.[a-zA-Z0-9-]+)*(?:\.[a-zA-Z0-9-]+|:\d+))"
    r"/[a-zA-Z0-9._-]+/"
)
IMAGE_NAME_UNSAFE_PATTERN = re.compile(r"[/._:@]")

# Skaffold output
SKAFFOLD_API_VERSION = "skaffold/v1beta4"
SKAFFOLD_KIND = "Config"

# CLI override namespaces
OVERRIDE_OPTION_KEY = "option"
OVERRIDE_METADATA_KEY = "metadata"
OVERRIDE_PROJECT_KEY = "project"

# External tools: (command, version args, version regex, requirement)
TOOLCHAIN_REQUIREMENTS = [
    ("kubectl", ["version", "--client"], r'(?:GitVersion:"v|Client Version: v)(\d[^"\s]*)', ">=1,<2"),
    ("helm", ["version", "--client"], r'(?:SemVer|Version):"v([^"]+)"', ">=2,<3"),
    ("skaffold", ["version"], r"v(\S+)", ">=0.22,<0.23"),
]


# Error codes
class ErrorCode:
    SCHEMA_INVALID = "HM001"
    DOCUMENT_UNREADABLE = "HM002"
    NO_DEFAULT_PROFILE = "HM003"
    PROFILE_NOT_FOUND = "HM004"
    PROJECT_FIELD_MISSING = "HM005"
    DEPLOYMENT_FIELD_MISSING = "HM006"
    OVERRIDE_UNMATCHED = "HM007"
    TEMPLATE_FAILED = "HM008"
    METADATA_MISSING = "HM009"
    PARAMETER_MISSING = "HM010"
    TOOLCHAIN_FAILED = "HM011"


# Environment variables
ENV_PREFIX = "HELMET"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ARROW = "→"
