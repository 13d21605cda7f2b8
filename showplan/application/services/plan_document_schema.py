"""Plan document schema definition (JSON Schema) and parsing.

The schedule stores the plan document as opaque JSON; every write path and
the publish path run it through parse_plan_document first.
"""

from typing import Any

import jsonschema

from showplan.domain.exceptions import SchemaValidationException
from showplan.domain.plan_document import PlanDocument

PLAN_DOCUMENT_SCHEMA_TYPE = "plan_document"
MAX_SHOW_NAME_LENGTH = 255

_UID = {"type": "string", "minLength": 1, "maxLength": 128}
_OPTIONAL_UID = {"type": ["string", "null"], "minLength": 1, "maxLength": 128}


def get_plan_document_schema_definition() -> dict[str, Any]:
    """Return JSON Schema for a schedule plan document."""
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "Schedule Plan Document",
        "type": "object",
        "required": ["shows"],
        "properties": {
            "metadata": {
                "type": "object",
                "properties": {
                    "lastEditedBy": {"type": ["string", "null"]},
                    "lastEditedAt": {"type": ["string", "null"]},
                    "totalShows": {"type": "integer", "minimum": 0},
                    "clientName": {"type": ["string", "null"]},
                    "dateRange": {
                        "type": "object",
                        "required": ["start", "end"],
                        "properties": {
                            "start": {"type": "string"},
                            "end": {"type": "string"},
                        },
                    },
                },
            },
            "shows": {"type": "array", "items": {"$ref": "#/definitions/show"}},
        },
        "definitions": {
            "show": {
                "type": "object",
                "required": [
                    "tempId",
                    "name",
                    "startTime",
                    "endTime",
                    "clientUid",
                    "showTypeUid",
                    "showStatusUid",
                    "showStandardUid",
                ],
                "properties": {
                    "tempId": _UID,
                    "existingShowUid": _OPTIONAL_UID,
                    "name": {
                        "type": "string",
                        "minLength": 1,
                        "maxLength": MAX_SHOW_NAME_LENGTH,
                    },
                    "startTime": {"type": "string", "minLength": 1},
                    "endTime": {"type": "string", "minLength": 1},
                    "clientUid": _UID,
                    "studioRoomUid": _OPTIONAL_UID,
                    "showTypeUid": _UID,
                    "showStatusUid": _UID,
                    "showStandardUid": _UID,
                    "mcs": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["mcUid"],
                            "properties": {
                                "mcUid": _UID,
                                "note": {"type": ["string", "null"]},
                                "metadata": {"type": ["object", "null"]},
                            },
                        },
                    },
                    "platforms": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["platformUid"],
                            "properties": {
                                "platformUid": _UID,
                                "liveStreamLink": {"type": ["string", "null"]},
                                "platformShowId": {"type": ["string", "null"]},
                                "viewerCount": {"type": ["integer", "null"], "minimum": 0},
                                "metadata": {"type": ["object", "null"]},
                            },
                        },
                    },
                    "metadata": {"type": ["object", "null"]},
                },
            },
        },
    }


_VALIDATOR = jsonschema.Draft7Validator(get_plan_document_schema_definition())


def collect_schema_errors(raw: Any) -> list[str]:
    """Return human-readable schema violations ('<path>: <message>'), empty when valid."""
    errors = []
    for error in sorted(_VALIDATOR.iter_errors(raw), key=lambda e: [str(p) for p in e.absolute_path]):
        path = ".".join(str(p) for p in error.absolute_path) or "<root>"
        errors.append(f"{path}: {error.message}")
    return errors


def parse_plan_document(raw: Any) -> PlanDocument:
    """Validate raw JSON against the plan document schema and parse it.

    Raises:
        SchemaValidationException: If the document violates the schema.
        ValidationException: If a show timestamp is not ISO-8601.
    """
    errors = collect_schema_errors(raw)
    if errors:
        raise SchemaValidationException(
            schema_type=PLAN_DOCUMENT_SCHEMA_TYPE,
            validation_errors=errors,
        )
    return PlanDocument.from_dict(raw)
