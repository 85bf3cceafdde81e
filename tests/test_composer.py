"""Response composition: responses built from dataset lookup answers.

Invariants:
    - one dataset response per queried dataset (all datasets by default)
    - datasetAlleleResponses only when includeDatasetResponses is true
    - failed or unknown datasets carry an error instead of an exists claim
    - the echoed alleleRequest is the defaulted request
    - non-conforming lookup answers are not passed on
"""

import pytest

from allele_beacon.composer import AlleleResponseComposer
from allele_beacon.model import (
    BeaconAlleleRequest,
    BeaconDataset,
    BeaconDatasetAlleleResponse,
    BeaconError,
)
from conftest import allele_request


def found_in(*dataset_ids: str):
    def lookup(request: BeaconAlleleRequest, dataset: BeaconDataset):
        return BeaconDatasetAlleleResponse(
            datasetId=dataset.id,
            exists=dataset.id in dataset_ids,
            variantCount=dataset.variantCount,
        )
    return lookup


def failing_lookup(request: BeaconAlleleRequest, dataset: BeaconDataset):
    raise RuntimeError("storage is offline")


def _request(**overrides) -> BeaconAlleleRequest:
    return BeaconAlleleRequest.model_validate(allele_request(**overrides))


@pytest.fixture
def composer(beacon_record) -> AlleleResponseComposer:
    return AlleleResponseComposer(beacon_record)


def test_one_dataset_response_per_known_dataset(composer):
    request = _request(includeDatasetResponses=True)
    response = composer.compose(request, found_in("ds2"))
    assert response.beaconId == "org.example.beacon"
    assert response.exists is True
    assert response.error is None
    assert [(r.datasetId, r.exists) for r in response.datasetAlleleResponses] \
        == [("ds1", False), ("ds2", True)]


def test_no_details_unless_requested(composer):
    response = composer.compose(_request(), found_in())
    assert response.exists is False
    assert response.datasetAlleleResponses is None


def test_only_requested_datasets_are_queried(composer):
    queried = []

    def lookup(request, dataset):
        queried.append(dataset.id)
        return BeaconDatasetAlleleResponse(datasetId=dataset.id, exists=True)

    request = _request(datasetIds=["ds2", "ds2"], includeDatasetResponses=True)
    response = composer.compose(request, lookup)
    assert queried == ["ds2"]
    assert [r.datasetId for r in response.datasetAlleleResponses] == ["ds2"]


def test_unknown_dataset_gets_an_error(composer):
    request = _request(datasetIds=["ds1", "nope"], includeDatasetResponses=True)
    response = composer.compose(request, found_in("ds1"))
    assert response.exists is True
    unknown = response.datasetAlleleResponses[1]
    assert unknown.datasetId == "nope"
    assert unknown.exists is None
    assert unknown.error.errorCode == 404


def test_only_unknown_datasets_is_an_error_response(composer):
    response = composer.compose(_request(datasetIds=["nope"]), found_in())
    assert response.exists is None
    assert response.error.errorCode == 404


def test_failing_lookup_is_reported_per_dataset(composer):
    calls = []

    def lookup(request, dataset):
        calls.append(dataset.id)
        if dataset.id == "ds1":
            raise RuntimeError("storage is offline")
        return BeaconDatasetAlleleResponse(datasetId=dataset.id, exists=False)

    response = composer.compose(
        _request(includeDatasetResponses=True), lookup)
    assert calls == ["ds1", "ds2"]
    assert response.exists is False
    failed = response.datasetAlleleResponses[0]
    assert failed.exists is None
    assert failed.error.errorCode == 500


def test_all_lookups_failing_is_an_error_response(composer):
    response = composer.compose(
        _request(includeDatasetResponses=True), failing_lookup)
    assert response.exists is None
    assert response.error.errorCode == 500
    assert all(r.error is not None for r in response.datasetAlleleResponses)


def test_lookup_answer_for_other_dataset_is_an_error(composer):
    def lookup(request, dataset):
        return BeaconDatasetAlleleResponse(datasetId="other", exists=True)

    response = composer.compose(_request(datasetIds=["ds1"]), lookup)
    assert response.error.errorCode == 500


NON_CONFORMING_ANSWERS = {
    "neither": {},
    "both": {"exists": True, "error": BeaconError(errorCode=1)},
}


@pytest.mark.parametrize("flag", [True, False])
@pytest.mark.parametrize("shape", sorted(NON_CONFORMING_ANSWERS))
def test_non_conforming_lookup_answer_is_an_error(composer, flag, shape):
    def lookup(request, dataset):
        return BeaconDatasetAlleleResponse(
            datasetId=dataset.id, **NON_CONFORMING_ANSWERS[shape])

    request = _request(datasetIds=["ds1"], includeDatasetResponses=flag)
    response = composer.compose(request, lookup)

    assert response.exists is None
    assert response.error.errorCode == 500
    if flag:
        [detail] = response.datasetAlleleResponses
        assert detail.exists is None
        assert detail.error.errorCode == 500


def test_non_conforming_answer_does_not_count_as_absent(composer):
    def lookup(request, dataset):
        if dataset.id == "ds1":
            return BeaconDatasetAlleleResponse(datasetId="ds1")
        return BeaconDatasetAlleleResponse(datasetId="ds2", exists=True)

    response = composer.compose(_request(), lookup)
    assert response.exists is True
    assert response.error is None
    assert response.datasetAlleleResponses is None


def test_empty_dataset_ids_is_a_bad_request(composer):
    request = _request(datasetIds=[], includeDatasetResponses=True)
    response = composer.compose(request, found_in())
    assert response.error.errorCode == 400
    assert response.datasetAlleleResponses == []


def test_error_response_with_details(composer):
    request = _request(includeDatasetResponses=True)
    response = composer.error_response(request, 503, "Maintenance")
    assert response.exists is None
    assert response.error == BeaconError(errorCode=503, message="Maintenance")
    assert [r.datasetId for r in response.datasetAlleleResponses] == [
        "ds1", "ds2"]
    assert all(r.error.errorCode == 503
               for r in response.datasetAlleleResponses)


def test_error_response_without_details(composer):
    response = composer.error_response(_request(), 503, "Maintenance")
    assert response.datasetAlleleResponses is None


def test_echoed_request_is_defaulted(composer):
    response = composer.answer(allele_request(), found_in("ds1"))
    assert response.alleleRequest == _request()
    assert response.alleleRequest.includeDatasetResponses is False


def test_answer_rejects_invalid_request(composer):
    response = composer.answer(
        allele_request(start=-1, referenceName="MT"), found_in("ds1"))
    assert response.exists is None
    assert response.alleleRequest is None
    assert response.error.errorCode == 400
    assert "[start]" in response.error.message
    assert "[referenceName]" in response.error.message
