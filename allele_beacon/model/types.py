import re
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated

from annotated_types import Ge, Le
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Strict,
    StringConstraints,
)
from pydantic_core import PydanticCustomError

from .enums import Chromosome, SemanticType

"""Annotated field types shared by the record models.

Each type carries a `Semantic` marker, which pydantic ignores but the field
schema (see schema.py) reads to describe the field.
"""

INT64_MAX = 2 ** 63 - 1
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# Error type used for value checks that pydantic has no built-in error for.
OUT_OF_DOMAIN = "out_of_domain"

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class Semantic:
    """Field-type marker: semantic type plus a readable value domain."""
    type: SemanticType
    domain: str | None = None


def _check_chromosome(value: str) -> str:
    if value not in Chromosome:
        raise PydanticCustomError(
            OUT_OF_DOMAIN,
            "referenceName must be one of 1..22, X, Y (got '{value}')",
            {"value": value},
        )
    return value


def parse_info(text: str) -> dict[str, str]:
    """Splits a semicolon-delimited `KEY=VALUE` INFO string into a dict.

    Empty segments (e.g. a trailing semicolon) are skipped. Raises ValueError
    for a segment that is not a `KEY=VALUE` pair.
    """
    result = {}
    for item in text.split(";"):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"expected KEY=VALUE, got {item!r}")
        result[key] = value.strip()
    return result


def _check_info(value: str) -> str:
    try:
        parse_info(value)
    except ValueError as e:
        raise PydanticCustomError(
            OUT_OF_DOMAIN,
            "alternateBasesInfo must be semicolon-delimited KEY=VALUE pairs: "
            "{reason}",
            {"reason": str(e)},
        ) from e
    return value


def _require_iso_string(value):
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise PydanticCustomError(
            "datetime_type",
            "Input should be an ISO-8601 date-time string",
        )
    return value


Text = Annotated[str, Semantic(SemanticType.STRING)]

Int = Annotated[
    int, Ge(INT32_MIN), Le(INT32_MAX), Semantic(SemanticType.INT32)]

Count = Annotated[
    int, Ge(0), Le(INT64_MAX), Semantic(SemanticType.INT64, ">= 0")]

Position = Annotated[
    int, Ge(0), Le(INT64_MAX), Semantic(SemanticType.INT64, ">= 0 (0-based)")]

Flag = Annotated[bool, Semantic(SemanticType.BOOLEAN)]

Frequency = Annotated[
    float, Ge(0.0), Le(1.0), Semantic(SemanticType.DOUBLE, "[0.0, 1.0]")]

ReferenceName = Annotated[
    str,
    AfterValidator(_check_chromosome),
    Semantic(SemanticType.STRING, "one of 1..22, X, Y"),
]

SequenceString = Annotated[
    str,
    StringConstraints(pattern=r"^[ACGTUNRYSWKMBDHV.-]+$"),
    Semantic(SemanticType.STRING, "IUPAC nucleotide codes"),
]

InfoString = Annotated[
    str,
    AfterValidator(_check_info),
    Semantic(SemanticType.STRING, "KEY=VALUE(;KEY=VALUE)*"),
]

# Only ISO-8601 strings reach the lax datetime parser:
Timestamp = Annotated[
    datetime,
    Strict(False),
    BeforeValidator(_require_iso_string),
    Semantic(SemanticType.STRING, "ISO-8601"),
]

Metadata = Annotated[dict[str, str], Semantic(SemanticType.MAP)]


class Record(BaseModel):
    """Base of all data contract records: immutable, strictly typed, and
    closed to fields the record does not declare."""
    model_config = ConfigDict(strict=True, frozen=True, extra="forbid")
