import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ..exceptions import ValidationFailed

_log = logging.getLogger(__name__)


class BeaconErrorResponseHandler:
    """API middleware for rendering rejected Beacon messages as JSON error
    responses with the complete list of validation errors.
    """

    def on_validation_failed(
            self, request: Request, exc: ValidationFailed,
    ) -> JSONResponse:
        _log.info(
            "Rejected message in request [%s %s] with %d error(s)",
            request.method,
            request.url.path,
            len(exc.errors),
        )
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "The message does not conform to the Beacon data contract",
            [error.model_dump(mode="json") for error in exc.errors],
        )


def _error_response(error_code: int, error_message: str, errors: list[dict]):
    return JSONResponse(
        status_code=error_code,
        content={
            "status_code": error_code,
            "message": error_message,
            "errors": errors,
        },
    )
