from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from record_access.domain.exceptions import (
    DataIntegrityViolationError,
    DomainError,
    InvalidPageRequestError,
    InvalidParameterError,
    MissingOrderingKeyError,
    StoreTimeoutError,
    StoreUnavailableError,
    WriteFailedError,
)
from record_access.domain.models.query import NotFound
from record_access.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)

# Most specific first; the first isinstance match wins.
STATUS_BY_ERROR = (
    (InvalidParameterError, HTTPStatus.BAD_REQUEST),
    (InvalidPageRequestError, HTTPStatus.BAD_REQUEST),
    (WriteFailedError, HTTPStatus.CONFLICT),
    (StoreTimeoutError, HTTPStatus.GATEWAY_TIMEOUT),
    (StoreUnavailableError, HTTPStatus.SERVICE_UNAVAILABLE),
    (DataIntegrityViolationError, HTTPStatus.INTERNAL_SERVER_ERROR),
    (MissingOrderingKeyError, HTTPStatus.INTERNAL_SERVER_ERROR),
)


def status_for(error: DomainError) -> HTTPStatus:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR


def not_found_response(missing: NotFound) -> JSONResponse:
    return JSONResponse(
        status_code=HTTPStatus.NOT_FOUND,
        content={"detail": f"{missing.entity.capitalize()} with id {missing.key} not found"},
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status = status_for(exc)
        if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        else:
            logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc)

        # Server-side failures keep their detail in the log only.
        detail = str(exc) if status < HTTPStatus.INTERNAL_SERVER_ERROR else status.phrase
        return JSONResponse(status_code=status, content={"detail": detail, "kind": type(exc).__name__})
