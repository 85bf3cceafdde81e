from fastapi import FastAPI

from .error import BeaconErrorResponseHandler
from ..exceptions import ValidationFailed


def add_exception_handlers(app: FastAPI) -> None:
    """Renders ValidationFailed raised by any endpoint of the app as an
    HTTP 400 response listing all validation errors."""
    h = BeaconErrorResponseHandler()
    app.add_exception_handler(ValidationFailed, h.on_validation_failed)


__all__ = ["BeaconErrorResponseHandler", "add_exception_handlers"]
