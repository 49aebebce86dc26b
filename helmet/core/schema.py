"""JSON schema of the helmet descriptor (draft-07)

``default`` entries are injected into the validated copy of the document.
Option values (push, cleanup, ...) deliberately carry no defaults here: they
are supplied as the lowest merge layer so a base profile can still set them.
"""

DOCUMENT_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "description": "Helmet definition",
    "type": "object",
    "properties": {
        "profiles": {
            "description": "Profile definitions",
            "type": "object",
            "additionalProperties": {"$ref": "#/definitions/IProfile"},
        },
    },
    "additionalProperties": False,
    "required": ["profiles"],
    "definitions": {
        "IProfile": {
            "description": "Profile definition",
            "type": "object",
            "properties": {
                "default": {
                    "description": "Sets the profile as the default one",
                    "type": "boolean",
                    "default": False,
                },
                "options": {
                    "description": "Profile options",
                    "default": {},
                    "$ref": "#/definitions/IOptions",
                },
                "projects": {
                    "description": "Project definitions",
                    "type": "object",
                    "default": {},
                    "additionalProperties": {"$ref": "#/definitions/IProject"},
                },
                "metadata": {
                    "description": "Profile metadata",
                    "type": "object",
                    "default": {},
                    "additionalProperties": True,
                },
            },
            "additionalProperties": False,
        },
        "IOptions": {
            "description": "Profile options",
            "type": "object",
            "properties": {
                "push": {
                    "description": "Should push images to the registry",
                    "type": "boolean",
                },
                "cleanup": {
                    "description": "Should cleanup resources after development mode stops",
                    "type": "boolean",
                },
                "forward": {
                    "description": "Should port-forward pod ports",
                    "type": "boolean",
                },
                "repository": {
                    "description": "The base repository name",
                    "type": "string",
                },
                "release": {
                    "description": "The release name template",
                    "type": "string",
                },
                "namespace": {
                    "description": "The namespace template",
                    "type": "string",
                },
                "tag": {
                    "description": "The image tag template",
                    "type": "string",
                },
            },
            "additionalProperties": False,
        },
        "IProject": {
            "description": "Project definition",
            "type": "object",
            "properties": {
                "image": {
                    "description": "Image definition",
                    "type": "object",
                    "properties": {
                        "name": {"description": "Image name", "type": "string"},
                        "context": {"description": "Project folder", "type": "string"},
                    },
                    "additionalProperties": False,
                    "required": ["name"],
                },
                "sync": {
                    "description": "Sync patterns",
                    "type": "object",
                    "additionalProperties": True,
                },
                "values": {
                    "description": "Project values",
                    "type": "object",
                    "additionalProperties": True,
                },
                "deployments": {
                    "description": "Deployment definitions",
                    "type": "object",
                    "default": {},
                    "additionalProperties": {"$ref": "#/definitions/IDeployment"},
                },
            },
            "additionalProperties": False,
        },
        "IDeployment": {
            "description": "Deployment definition",
            "type": "object",
            "properties": {
                "recreate": {
                    "description": "Recreate pods",
                    "type": "boolean",
                },
                "namespace": {"description": "Namespace name", "type": "string"},
                "release": {"description": "Release name", "type": "string"},
                "chart": {"description": "Chart folder", "type": "string"},
                "values": {
                    "description": "Override values",
                    "type": "object",
                    "additionalProperties": True,
                },
            },
            "additionalProperties": False,
        },
    },
}
