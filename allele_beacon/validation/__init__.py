from typing import Any

from .consistency import RULES, Rule, check_consistency, walk_records
from .errors import (
    ConsistencyError,
    ErrorKind,
    FieldError,
    Rejected,
    RuleName,
    Valid,
    ValidationIssue,
    ValidationResult,
)
from .structural import drop_nulls, validate_structure
from ..model.allele import BeaconAlleleRequest
from ..model.schema import RecordType
from ..model.types import Record
from ..setup.model import ValidationPolicy


def validate(
        record_type: RecordType | str,
        raw: Any,
        request: BeaconAlleleRequest | None = None,
        policy: ValidationPolicy | None = None,
) -> ValidationResult:
    """Full validation of a message: structural checks first, then the
    cross-field rules (only when the structure is valid).

    The function is pure; it may be called concurrently from any thread.
    """
    result = validate_structure(record_type, raw)
    if isinstance(result, Rejected):
        return result
    return check_consistency(result.record, request=request, policy=policy)


def ensure_valid(
        record_type: RecordType | str,
        raw: Any,
        request: BeaconAlleleRequest | None = None,
        policy: ValidationPolicy | None = None,
) -> Record:
    """Like validate(), but returns the record or raises ValidationFailed."""
    return validate(record_type, raw, request, policy).unwrap()


__all__ = [
    "ConsistencyError",
    "ErrorKind",
    "FieldError",
    "RULES",
    "Rejected",
    "Rule",
    "RuleName",
    "Valid",
    "ValidationIssue",
    "ValidationResult",
    "check_consistency",
    "drop_nulls",
    "ensure_valid",
    "validate",
    "validate_structure",
    "walk_records",
]
