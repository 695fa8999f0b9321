"""Payload Validation — whole-payload schema checks ahead of any data access.

Invariants:
    - A payload is either fully valid (typed model returned) or rejected whole
    - Rejection is always PayloadValidationError with a {field: message} map
    - Field names are wire names (camelCase aliases), matching what clients sent
    - Non-object bodies (arrays, scalars, malformed JSON) are reported under "body"

Design Decisions:
    - Pydantic models are the single schema source; this module only adapts
      pydantic's error list to the field-indexed shape clients render
    - First message per field wins: one actionable message per form input
"""

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from blogrpc.core.errors import PayloadValidationError

M = TypeVar("M", bound=BaseModel)

BODY_FIELD = "body"


def field_errors(exc: ValidationError) -> dict[str, str]:
    """Collapse pydantic errors into one message per wire field."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or BODY_FIELD
        errors.setdefault(field, error["msg"])
    return errors


def validate_payload(schema: type[M], payload: object) -> M:
    """Validate payload against schema or raise PayloadValidationError."""
    if not isinstance(payload, dict):
        raise PayloadValidationError(
            {BODY_FIELD: "Request body must be a JSON object"},
        )
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise PayloadValidationError(field_errors(e)) from e
