"""Exception definitions for helmet"""

from typing import List, Optional

from ..constants import ErrorCode


class HelmetError(Exception):
    """Base exception for helmet"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    @property
    def messages(self) -> List[str]:
        """Human-readable lines describing the failure"""
        return [self.message]


class DocumentError(HelmetError):
    """Descriptor file could not be read or parsed"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, ErrorCode.DOCUMENT_UNREADABLE)
        self.path = path


class SchemaError(HelmetError):
    """Descriptor violates the document schema

    All violations are collected so they can be fixed in one pass.
    """

    def __init__(self, errors: List['FieldError']):
        count = len(errors)
        super().__init__(
            f"Failed to validate configuration format ({count} error{'s' if count != 1 else ''})",
            ErrorCode.SCHEMA_INVALID
        )
        self.errors = errors

    @property
    def messages(self) -> List[str]:
        return [self.message] + [str(error) for error in self.errors]


class FieldError:
    """A single field-level schema violation"""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"

    def __repr__(self) -> str:
        return f"FieldError({self.path!r}, {self.message!r})"


class ResolutionError(HelmetError):
    """Profile could not be resolved"""
    pass


class NoDefaultProfileError(ResolutionError):
    """No profile is flagged as default"""

    def __init__(self):
        super().__init__("No default profile found.", ErrorCode.NO_DEFAULT_PROFILE)


class ProfileNotFoundError(ResolutionError):
    """Requested profile is not defined"""

    def __init__(self, profile_name: str):
        super().__init__(
            f'Missing profile definition for "{profile_name}"',
            ErrorCode.PROFILE_NOT_FOUND
        )
        self.profile_name = profile_name


class MissingProjectFieldError(ResolutionError):
    """Project lacks a required field"""

    def __init__(self, project_name: str, field_name: str):
        super().__init__(
            f'Project "{project_name}" is missing {field_name.replace(".", " ")}',
            ErrorCode.PROJECT_FIELD_MISSING
        )
        self.project_name = project_name
        self.field_name = field_name


class MissingDeploymentFieldError(ResolutionError):
    """Deployment lacks a required field"""

    def __init__(self, project_name: str, deployment_name: str, field_name: str):
        super().__init__(
            f'Deployment "{deployment_name}" of project "{project_name}" is missing {field_name}',
            ErrorCode.DEPLOYMENT_FIELD_MISSING
        )
        self.project_name = project_name
        self.deployment_name = deployment_name
        self.field_name = field_name


class OverrideError(HelmetError):
    """CLI override pattern matched nothing"""

    def __init__(self, pattern: str, kind: str = "project"):
        super().__init__(
            f'No {kind} name matches "{pattern}" pattern. Check your values.',
            ErrorCode.OVERRIDE_UNMATCHED
        )
        self.pattern = pattern
        self.kind = kind


class TemplateError(HelmetError):
    """Template failed to render"""

    def __init__(self, message: str, template: Optional[str] = None, error_code: str = None):
        super().__init__(message, error_code or ErrorCode.TEMPLATE_FAILED)
        self.template = template

    @property
    def messages(self) -> List[str]:
        if self.template is None:
            return [self.message]
        return [self.message, f"  in template: {self.template}"]


class MissingMetadataError(TemplateError):
    """Template references undefined profile metadata"""

    def __init__(self, path: str):
        super().__init__(
            f'Could not find metadata "{path}". Did you miss --metadata.{path}?',
            error_code=ErrorCode.METADATA_MISSING
        )
        self.path = path


class MissingParameterError(TemplateError):
    """Template references an undefined CLI parameter"""

    def __init__(self, path: str):
        super().__init__(
            f'Param "{path}" is used in this profile. Did you miss --{path}?',
            error_code=ErrorCode.PARAMETER_MISSING
        )
        self.path = path


class ToolchainError(HelmetError):
    """External tool missing or incompatible"""

    def __init__(self, message: str, command: Optional[str] = None):
        super().__init__(message, ErrorCode.TOOLCHAIN_FAILED)
        self.command = command
