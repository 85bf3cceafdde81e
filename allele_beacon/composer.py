from collections.abc import Callable
from logging import getLogger
from typing import Any

from fastapi import status

from .model.allele import (
    BeaconAlleleRequest,
    BeaconAlleleResponse,
    BeaconDatasetAlleleResponse,
    BeaconError,
)
from .model.beacon import Beacon, BeaconDataset
from .model.schema import RecordType
from .setup.model import ValidationPolicy
from .validation import Rejected, validate

"""Composition of BeaconAlleleResponses from BeaconAlleleRequests.

Whether an allele exists in a dataset is decided by the lookup function that
the query engine provides; the composer only makes sure that the response
built from those answers is well-formed:

* one BeaconDatasetAlleleResponse per queried dataset, each carrying either
  `exists` or `error`,
* `datasetAlleleResponses` only when the request asked for them,
* the echoed `alleleRequest` is the validated (defaulted) request.
"""

_log = getLogger(__name__)

DatasetLookup = Callable[
    [BeaconAlleleRequest, BeaconDataset], BeaconDatasetAlleleResponse]


class AlleleResponseComposer:
    """Builds validated allele responses on behalf of a single Beacon."""

    def __init__(self, beacon: Beacon, policy: ValidationPolicy | None = None):
        self._beacon = beacon
        self._policy = policy or ValidationPolicy()

    @property
    def beacon_id(self) -> str:
        return self._beacon.id

    def target_dataset_ids(self, request: BeaconAlleleRequest) -> list[str]:
        """Requested dataset IDs (duplicates removed), or all datasets of the
        Beacon when the request does not name any."""
        if request.datasetIds is None:
            return self._beacon.get_dataset_ids()
        return list(dict.fromkeys(request.datasetIds))

    def answer(self, raw_request: Any, lookup: DatasetLookup) -> BeaconAlleleResponse:
        """Validates the raw request and composes the response for it.

        A rejected request is answered with an HTTP 400 error response that
        lists every validation error in its message.
        """
        result = validate(
            RecordType.BEACON_ALLELE_REQUEST, raw_request, policy=self._policy)
        if isinstance(result, Rejected):
            message = "; ".join(str(e) for e in result.errors)
            _log.info("Rejected allele request: %s", message)
            return self._checked(BeaconAlleleResponse(
                beaconId=self.beacon_id,
                error=BeaconError(
                    errorCode=status.HTTP_400_BAD_REQUEST, message=message),
            ))
        return self.compose(result.record, lookup)

    def compose(
            self, request: BeaconAlleleRequest, lookup: DatasetLookup,
    ) -> BeaconAlleleResponse:
        """Queries every target dataset with the lookup function and composes
        the response. A lookup answer that does not conform to the data
        contract becomes a per-dataset error. Raises ValidationFailed when the
        composed response itself does not conform."""
        dataset_ids = self.target_dataset_ids(request)
        if len(dataset_ids) == 0:
            return self.error_response(
                request, status.HTTP_400_BAD_REQUEST,
                "datasetIds must name at least one dataset")

        responses = [
            self._dataset_response(request, dataset_id, lookup)
            for dataset_id in dataset_ids
        ]
        answered = [r for r in responses if r.error is None]

        exists = None
        error = None
        if answered:
            exists = any(r.exists for r in answered)
        else:
            codes = {r.error.errorCode for r in responses}
            code = codes.pop() if len(codes) == 1 \
                else status.HTTP_500_INTERNAL_SERVER_ERROR
            error = BeaconError(
                errorCode=code,
                message="None of the queried datasets could be searched",
            )

        _log.debug(
            "Allele %s:%d %s>%s (%s) -> exists=%s in %d/%d dataset(s)",
            request.referenceName, request.start, request.referenceBases,
            request.alternateBases, request.assemblyId, exists,
            len(answered), len(responses),
        )

        response = BeaconAlleleResponse(
            beaconId=self.beacon_id,
            exists=exists,
            error=error,
            alleleRequest=request,
            datasetAlleleResponses=self._details(request, responses),
        )
        return self._checked(response, request)

    def error_response(
            self, request: BeaconAlleleRequest, error_code: int, message: str,
    ) -> BeaconAlleleResponse:
        """Response for a request that could not be answered at all."""
        details = [
            _dataset_error(dataset_id, error_code, message)
            for dataset_id in self.target_dataset_ids(request)
        ]
        response = BeaconAlleleResponse(
            beaconId=self.beacon_id,
            error=BeaconError(errorCode=error_code, message=message),
            alleleRequest=request,
            datasetAlleleResponses=self._details(request, details),
        )
        return self._checked(response, request)

    def _dataset_response(
            self,
            request: BeaconAlleleRequest,
            dataset_id: str,
            lookup: DatasetLookup,
    ) -> BeaconDatasetAlleleResponse:
        dataset = self._beacon.get_dataset(dataset_id)
        if dataset is None:
            return _dataset_error(
                dataset_id, status.HTTP_404_NOT_FOUND, "Dataset not found")

        try:
            response = lookup(request, dataset)
        except Exception as e:
            _log.error("Allele lookup failed for dataset [%s]", dataset_id,
                       exc_info=e)
            return _dataset_error(
                dataset_id, status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to query the dataset due to technical error")

        if response.datasetId != dataset_id:
            _log.error("Allele lookup for dataset [%s] answered for [%s]",
                       dataset_id, response.datasetId)
            return _dataset_error(
                dataset_id, status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to query the dataset due to technical error")

        answer = validate(
            RecordType.BEACON_DATASET_ALLELE_RESPONSE, response,
            policy=self._policy)
        if isinstance(answer, Rejected):
            _log.error("Allele lookup for dataset [%s] answered with: %s",
                       dataset_id, "; ".join(str(e) for e in answer.errors))
            return _dataset_error(
                dataset_id, status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to query the dataset due to technical error")

        return answer.record

    @staticmethod
    def _details(
            request: BeaconAlleleRequest,
            responses: list[BeaconDatasetAlleleResponse],
    ) -> list[BeaconDatasetAlleleResponse] | None:
        return responses if request.includeDatasetResponses else None

    def _checked(
            self,
            response: BeaconAlleleResponse,
            request: BeaconAlleleRequest | None = None,
    ) -> BeaconAlleleResponse:
        result = validate(RecordType.BEACON_ALLELE_RESPONSE, response,
                          request=request, policy=self._policy)
        return result.unwrap()


def _dataset_error(
        dataset_id: str, error_code: int, message: str,
) -> BeaconDatasetAlleleResponse:
    return BeaconDatasetAlleleResponse(
        datasetId=dataset_id,
        error=BeaconError(errorCode=error_code, message=message),
    )


__all__ = ["AlleleResponseComposer", "DatasetLookup"]
