"""Validation pipeline: end-to-end properties of validate().

Invariants:
    - re-validating a valid record returns an equal record, no errors
    - the echoed request of a composed response re-validates to itself
    - a valid response has exists xor error, and details iff requested
"""

import pytest

from allele_beacon.composer import AlleleResponseComposer
from allele_beacon.exceptions import ValidationFailed
from allele_beacon.model import (
    BeaconAlleleResponse,
    BeaconDatasetAlleleResponse,
    RecordType,
)
from allele_beacon.validation import (
    Rejected,
    RuleName,
    Valid,
    ensure_valid,
    validate,
)
from conftest import allele_request, beacon, dataset


def lookup(request, dataset):
    return BeaconDatasetAlleleResponse(
        datasetId=dataset.id, exists=True, frequency=0.25)


@pytest.mark.parametrize("record_type, raw", [
    (RecordType.BEACON_ALLELE_REQUEST, allele_request(datasetIds=["ds1"])),
    (RecordType.BEACON_DATASET, dataset()),
    (RecordType.BEACON, beacon()),
    (RecordType.BEACON_ERROR, {"errorCode": 404}),
])
def test_validation_is_idempotent(record_type, raw):
    first = validate(record_type, raw)
    assert isinstance(first, Valid)
    second = validate(record_type, first.record)
    assert isinstance(second, Valid)
    assert second.record == first.record
    assert second.warnings == ()


def test_scenario_two_known_datasets_with_details(beacon_record):
    raw = allele_request(includeDatasetResponses=True)
    request = ensure_valid(RecordType.BEACON_ALLELE_REQUEST, raw)

    response = AlleleResponseComposer(beacon_record).compose(request, lookup)

    assert len(response.datasetAlleleResponses) == 2
    assert validate(
        RecordType.BEACON_ALLELE_RESPONSE, response, request=request).ok


@pytest.mark.parametrize("flag", [True, False])
def test_details_present_iff_requested(beacon_record, flag):
    request = ensure_valid(
        RecordType.BEACON_ALLELE_REQUEST,
        allele_request(includeDatasetResponses=flag),
    )
    response = AlleleResponseComposer(beacon_record).compose(request, lookup)
    assert (response.datasetAlleleResponses is not None) == flag
    assert (response.exists is not None) != (response.error is not None)


def test_echoed_request_round_trip(beacon_record):
    response = AlleleResponseComposer(beacon_record).answer(
        allele_request(alternateBasesInfo="END=101"), lookup)

    echoed = response.alleleRequest
    result = validate(RecordType.BEACON_ALLELE_REQUEST, echoed)
    assert isinstance(result, Valid)
    assert result.record == echoed


def test_response_from_raw_json_payload():
    raw = {
        "beaconId": "b1",
        "exists": None,
        "error": {"errorCode": 500, "message": "x"},
        "alleleRequest": allele_request(),
        "datasetAlleleResponses": None,
    }
    result = validate(RecordType.BEACON_ALLELE_RESPONSE, raw)
    assert isinstance(result, Valid)
    assert isinstance(result.record, BeaconAlleleResponse)


def test_ensure_valid_raises_with_all_errors():
    raw = {"beaconId": "b1", "exists": True, "error": {"errorCode": 500}}
    with pytest.raises(ValidationFailed) as e:
        ensure_valid(RecordType.BEACON_ALLELE_RESPONSE, raw)
    assert len(e.value.errors) == 1
    assert "ExistsXorError" in str(e.value)


def test_rejected_helpers():
    result = validate(RecordType.BEACON, beacon(datasets=[]))
    assert isinstance(result, Rejected)
    assert not result.ok
    assert result.has_rule(RuleName.NON_EMPTY_DATASET_LIST)
    assert not result.has_rule(RuleName.EXISTS_XOR_ERROR)
