from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from ..exceptions import ValidationFailed
from ..model.types import Record

"""Validation outcome: either Valid(record) or Rejected(errors)."""

R = TypeVar("R", bound=Record)


class ErrorKind(StrEnum):
    MISSING = "Missing"
    TYPE_MISMATCH = "TypeMismatch"
    OUT_OF_DOMAIN = "OutOfDomain"
    CONSISTENCY_VIOLATION = "ConsistencyViolation"


class RuleName(StrEnum):
    """Named cross-field rules."""
    EXISTS_XOR_ERROR = "ExistsXorError"
    DATASET_RESPONSES_MATCH_FLAG = "DatasetResponsesMatchFlag"
    TIMESTAMP_ORDERING = "TimestampOrdering"
    NON_EMPTY_DATASET_LIST = "NonEmptyDatasetList"
    UNIQUE_DATASET_IDS = "UniqueDatasetIds"
    INFO_KEY_VOCABULARY = "InfoKeyVocabulary"


class FieldError(BaseModel):
    """Structural problem of a single field.

    `field` is the dotted path of the field within the message, or an empty
    string when the message itself has the wrong shape.
    """
    model_config = ConfigDict(frozen=True)
    field: str
    kind: ErrorKind
    message: str
    value: Any = None

    def __str__(self) -> str:
        return f"{self.kind} [{self.field}]: {self.message}"


class ConsistencyError(BaseModel):
    model_config = ConfigDict(frozen=True)
    rule: RuleName
    field: str
    message: str
    kind: ErrorKind = ErrorKind.CONSISTENCY_VIOLATION

    def __str__(self) -> str:
        return f"{self.kind}({self.rule}) [{self.field}]: {self.message}"


ValidationIssue = FieldError | ConsistencyError


@dataclass(frozen=True)
class Valid(Generic[R]):
    """Successful validation; warnings are violations of warn-only rules."""
    record: R
    warnings: tuple[ConsistencyError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> R:
        return self.record


@dataclass(frozen=True)
class Rejected:
    """Failed validation with every error found in the pass."""
    errors: tuple[ValidationIssue, ...]

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise ValidationFailed(self.errors)

    def has_rule(self, rule: RuleName) -> bool:
        return any(
            isinstance(e, ConsistencyError) and e.rule == rule
            for e in self.errors
        )

    def has_kind(self, kind: ErrorKind) -> bool:
        return any(e.kind == kind for e in self.errors)


ValidationResult = Valid | Rejected
