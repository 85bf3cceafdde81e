from dataclasses import dataclass
from enum import StrEnum
from functools import cache
from types import NoneType, UnionType
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic.fields import FieldInfo

from .allele import (
    BeaconAlleleRequest,
    BeaconAlleleResponse,
    BeaconDatasetAlleleResponse,
    BeaconError,
)
from .beacon import Beacon, BeaconDataset, BeaconOrganization
from .enums import SemanticType
from .types import Record, Semantic

"""Field schema: describes every record type and its fields.

The record models are the single source of truth; descriptors are derived
from their field annotations, so adding a field to a model is enough for it
to show up here (and in the validators, which work off the models).
"""


class RecordType(StrEnum):
    """Record types of the data contract (values match the model names)."""
    BEACON_ALLELE_REQUEST = "BeaconAlleleRequest"
    BEACON_DATASET = "BeaconDataset"
    BEACON_ORGANIZATION = "BeaconOrganization"
    BEACON = "Beacon"
    BEACON_ERROR = "BeaconError"
    BEACON_DATASET_ALLELE_RESPONSE = "BeaconDatasetAlleleResponse"
    BEACON_ALLELE_RESPONSE = "BeaconAlleleResponse"


_MODELS: dict[RecordType, type[Record]] = {
    RecordType.BEACON_ALLELE_REQUEST: BeaconAlleleRequest,
    RecordType.BEACON_DATASET: BeaconDataset,
    RecordType.BEACON_ORGANIZATION: BeaconOrganization,
    RecordType.BEACON: Beacon,
    RecordType.BEACON_ERROR: BeaconError,
    RecordType.BEACON_DATASET_ALLELE_RESPONSE: BeaconDatasetAlleleResponse,
    RecordType.BEACON_ALLELE_RESPONSE: BeaconAlleleResponse,
}


@dataclass(frozen=True)
class FieldDescriptor:
    """Describes a single record field.

    `item_type` is set for sequences, `record_type` for nested records and
    sequences of records. `default` is meaningful only for optional fields.
    """
    name: str
    type: SemanticType
    optional: bool
    default: Any = None
    item_type: SemanticType | None = None
    record_type: RecordType | None = None
    domain: str | None = None


def record_model(record_type: RecordType | str) -> type[Record]:
    """Returns the model class of the record type.

    Raises ValueError for an unknown record type name.
    """
    return _MODELS[RecordType(record_type)]


def record_type_of(model: type[Record] | Record) -> RecordType:
    if isinstance(model, Record):
        model = type(model)
    return RecordType(model.__name__)


@cache
def fields_of(record_type: RecordType | str) -> tuple[FieldDescriptor, ...]:
    """Returns the field descriptors of the record type in declaration
    order."""
    model = record_model(record_type)
    return tuple(
        _describe(name, info) for name, info in model.model_fields.items()
    )


def _describe(name: str, info: FieldInfo) -> FieldDescriptor:
    base, metadata = _unwrap(info.annotation, info.metadata)
    semantic = _semantic(base, metadata)

    item_type = None
    record_type = None
    if semantic.type == SemanticType.SEQUENCE:
        item_base, item_metadata = _unwrap(get_args(base)[0], [])
        item_type = _semantic(item_base, item_metadata).type
        if item_type == SemanticType.RECORD:
            record_type = record_type_of(item_base)
    elif semantic.type == SemanticType.RECORD:
        record_type = record_type_of(base)

    optional = not info.is_required()
    return FieldDescriptor(
        name=name,
        type=semantic.type,
        optional=optional,
        default=info.default if optional else None,
        item_type=item_type,
        record_type=record_type,
        domain=semantic.domain,
    )


def _unwrap(annotation, metadata: list) -> tuple[Any, list]:
    """Strips `| None` and `Annotated[...]` wrappers, collecting metadata."""
    if get_origin(annotation) in (Union, UnionType):
        # Only `X | None` unions are used in the records:
        args = [a for a in get_args(annotation) if a is not NoneType]
        annotation = args[0]
    if get_origin(annotation) is Annotated:
        base, *extra = get_args(annotation)
        return _unwrap(base, [*metadata, *extra])
    return annotation, list(metadata)


def _semantic(base, metadata: list) -> Semantic:
    for item in metadata:
        if isinstance(item, Semantic):
            return item

    origin = get_origin(base)
    if origin is list:
        return Semantic(SemanticType.SEQUENCE)
    if origin is dict:
        return Semantic(SemanticType.MAP)
    if isinstance(base, type) and issubclass(base, Record):
        return Semantic(SemanticType.RECORD)
    if base is bool:
        return Semantic(SemanticType.BOOLEAN)
    if base is int:
        return Semantic(SemanticType.INT64)
    if base is float:
        return Semantic(SemanticType.DOUBLE)
    if base is str:
        return Semantic(SemanticType.STRING)
    raise TypeError(f"No semantic type for annotation: {base!r}")


__all__ = [
    "FieldDescriptor",
    "RecordType",
    "fields_of",
    "record_model",
    "record_type_of",
]
