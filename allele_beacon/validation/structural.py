from collections.abc import Mapping
from logging import getLogger
from typing import Any

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from .errors import ErrorKind, FieldError, Rejected, Valid, ValidationResult
from ..model.schema import RecordType, record_model
from ..model.types import OUT_OF_DOMAIN, Record

"""Structural validation: required fields, field types and value domains.

pydantic does the actual work (it reports every error rather than stopping
at the first one); here its error details are mapped onto FieldErrors.
"""

_log = getLogger(__name__)

# pydantic error types that mean "right representation, wrong value":
_DOMAIN_ERROR_TYPES = {
    OUT_OF_DOMAIN,
    "greater_than",
    "greater_than_equal",
    "less_than",
    "less_than_equal",
    "string_pattern_mismatch",
    "finite_number",
}


def validate_structure(
        record_type: RecordType | str, raw: Any,
) -> ValidationResult:
    """Validates the raw (decoded JSON) value as the given record type.

    Returns Valid with the record, or Rejected with all field errors. An
    already constructed record is accepted too, and is validated again from
    its field values.
    """
    model = record_model(record_type)

    if isinstance(raw, Record):
        raw = raw.model_dump(exclude_none=True)
    else:
        raw = drop_nulls(raw)

    try:
        record = model.model_validate(raw)
    except ValidationError as e:
        errors = tuple(
            to_field_error(detail) for detail in e.errors(include_url=False)
        )
        _log.debug(
            "%s rejected with %d field error(s)", model.__name__, len(errors))
        return Rejected(errors)

    return Valid(record)


def drop_nulls(value: Any) -> Any:
    """Defaulting step: removes None-valued keys from mappings (recursively),
    so that explicit nulls are treated exactly like absent fields."""
    if isinstance(value, Mapping):
        return {k: drop_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [drop_nulls(item) for item in value]
    return value


def to_field_error(detail: ErrorDetails) -> FieldError:
    path = ".".join(str(part) for part in detail["loc"])
    error_type = detail["type"]

    if error_type == "missing":
        return FieldError(
            field=path,
            kind=ErrorKind.MISSING,
            message="Required field is missing",
        )

    if error_type in _DOMAIN_ERROR_TYPES:
        kind = ErrorKind.OUT_OF_DOMAIN
    else:
        kind = ErrorKind.TYPE_MISMATCH

    return FieldError(
        field=path,
        kind=kind,
        message=detail["msg"],
        value=detail.get("input"),
    )


__all__ = ["drop_nulls", "to_field_error", "validate_structure"]
