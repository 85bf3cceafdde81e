from collections import Counter
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger

from .errors import (
    ConsistencyError,
    Rejected,
    RuleName,
    Valid,
    ValidationResult,
)
from ..model.allele import (
    BeaconAlleleRequest,
    BeaconAlleleResponse,
    BeaconDatasetAlleleResponse,
)
from ..model.beacon import Beacon, BeaconDataset
from ..model.enums import InfoKey
from ..model.types import Record, parse_info
from ..setup.model import InfoKeyPolicy, ValidationPolicy

"""Cross-field consistency validation.

Rules are listed in RULES. Every rule is applied to every (nested) record of
a matching type, and all violations are collected before returning.
"""

_log = getLogger(__name__)


@dataclass(frozen=True)
class RuleContext:
    """Inputs of a rule besides the record itself."""
    request: BeaconAlleleRequest | None
    policy: ValidationPolicy


# A check returns (field, message) pairs; the field is relative to the record.
RuleCheck = Callable[[Record, RuleContext], list[tuple[str, str]]]


def _always_strict(_: ValidationPolicy) -> bool:
    return True


@dataclass(frozen=True)
class Rule:
    name: RuleName
    applies_to: tuple[type[Record], ...]
    check: RuleCheck
    is_strict: Callable[[ValidationPolicy], bool] = _always_strict


def exists_xor_error(
        record: BeaconAlleleResponse | BeaconDatasetAlleleResponse,
        _: RuleContext,
) -> list[tuple[str, str]]:
    has_exists = record.exists is not None
    has_error = record.error is not None
    if has_exists and has_error:
        return [("exists", "exists and error must not be both present")]
    if not has_exists and not has_error:
        return [("exists", "either exists or error must be present")]
    return []


def dataset_responses_match_flag(
        record: BeaconAlleleResponse, context: RuleContext,
) -> list[tuple[str, str]]:
    request = context.request or record.alleleRequest
    if request is None:
        _log.debug("No request for response [%s]; flag check skipped",
                   record.beaconId)
        return []

    present = record.datasetAlleleResponses is not None
    if present and not request.includeDatasetResponses:
        return [("datasetAlleleResponses",
                 "datasetAlleleResponses must be absent when "
                 "includeDatasetResponses is false")]
    if not present and request.includeDatasetResponses:
        return [("datasetAlleleResponses",
                 "datasetAlleleResponses must be present when "
                 "includeDatasetResponses is true")]
    return []


def timestamp_ordering(
        record: BeaconDataset | Beacon, context: RuleContext,
) -> list[tuple[str, str]]:
    if isinstance(record, Beacon) and \
            not context.policy.beacon_timestamp_ordering:
        return []

    created = record.createDateTime
    updated = record.updateDateTime
    if created is None or updated is None:
        return []

    if _as_utc(updated) < _as_utc(created):
        return [("updateDateTime",
                 f"updateDateTime ({updated.isoformat()}) is earlier than "
                 f"createDateTime ({created.isoformat()})")]
    return []


def non_empty_dataset_list(
        record: Beacon, _: RuleContext,
) -> list[tuple[str, str]]:
    if len(record.datasets) == 0:
        return [("datasets", "Beacon must list at least one dataset")]
    return []


def unique_dataset_ids(
        record: Beacon, _: RuleContext,
) -> list[tuple[str, str]]:
    counts = Counter(dataset.id for dataset in record.datasets)
    return [
        ("datasets", f"Dataset id [{dataset_id}] is listed {count} times")
        for dataset_id, count in counts.items() if count > 1
    ]


def info_key_vocabulary(
        record: BeaconAlleleRequest, _: RuleContext,
) -> list[tuple[str, str]]:
    if record.alternateBasesInfo is None:
        return []

    # The format itself was already checked by the structural validation.
    keys = parse_info(record.alternateBasesInfo).keys()
    unknown = sorted(key for key in keys if key not in InfoKey)
    if unknown:
        allowed = ", ".join(InfoKey)
        return [("alternateBasesInfo",
                 f"Unrecognised INFO key(s): {', '.join(unknown)} "
                 f"(expected: {allowed})")]
    return []


def _info_keys_strict(policy: ValidationPolicy) -> bool:
    return policy.info_key_policy == InfoKeyPolicy.REJECT


RULES: tuple[Rule, ...] = (
    Rule(RuleName.EXISTS_XOR_ERROR,
         (BeaconAlleleResponse, BeaconDatasetAlleleResponse),
         exists_xor_error),
    Rule(RuleName.DATASET_RESPONSES_MATCH_FLAG,
         (BeaconAlleleResponse,),
         dataset_responses_match_flag),
    Rule(RuleName.TIMESTAMP_ORDERING,
         (BeaconDataset, Beacon),
         timestamp_ordering),
    Rule(RuleName.NON_EMPTY_DATASET_LIST,
         (Beacon,),
         non_empty_dataset_list),
    Rule(RuleName.UNIQUE_DATASET_IDS,
         (Beacon,),
         unique_dataset_ids),
    Rule(RuleName.INFO_KEY_VOCABULARY,
         (BeaconAlleleRequest,),
         info_key_vocabulary,
         _info_keys_strict),
)


def check_consistency(
        record: Record,
        request: BeaconAlleleRequest | None = None,
        policy: ValidationPolicy | None = None,
) -> ValidationResult:
    """Applies the cross-field rules to a structurally valid record.

    Args:
        record: The record to check, including its nested records.
        request: The request a BeaconAlleleResponse answers. When omitted,
          the echoed alleleRequest of the response is used instead.
        policy: Strictness switches; defaults to ValidationPolicy().

    Returns:
        Rejected with all violations of strict rules, or Valid carrying the
        violations of warn-only rules as warnings.
    """
    context = RuleContext(request, policy or ValidationPolicy())
    errors = []
    warnings = []

    for path, node in walk_records(record):
        for rule in RULES:
            if not isinstance(node, rule.applies_to):
                continue
            for field, message in rule.check(node, context):
                error = ConsistencyError(
                    rule=rule.name, field=_join(path, field), message=message)
                if rule.is_strict(context.policy):
                    errors.append(error)
                else:
                    warnings.append(error)

    for warning in warnings:
        _log.warning("Accepted despite %s", warning)

    if errors:
        _log.debug("%s rejected with %d consistency error(s)",
                   type(record).__name__, len(errors))
        return Rejected(tuple(errors))

    return Valid(record, tuple(warnings))


def walk_records(record: Record, path: str = "") -> Iterator[tuple[str, Record]]:
    """Yields the record and all nested records with their dotted paths."""
    yield path, record
    for name in type(record).model_fields:
        value = getattr(record, name)
        child_path = _join(path, name)
        if isinstance(value, Record):
            yield from walk_records(value, child_path)
        elif isinstance(value, list):
            for i, item in enumerate(value):
                if isinstance(item, Record):
                    yield from walk_records(item, f"{child_path}.{i}")


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _as_utc(value: datetime) -> datetime:
    # Timestamps without an offset are taken as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


__all__ = ["RULES", "Rule", "RuleContext", "check_consistency", "walk_records"]
