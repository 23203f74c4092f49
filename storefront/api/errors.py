# storefront/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.errors import (
    CatalogUnavailable,
    Forbidden,
    InvalidArgument,
    InvalidState,
    NotFound,
    OrderCannotBeCancelled,
    StorageFailure,
    StoreError,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#najbardziej szczegolowa klasa pierwsza - szukamy po MRO wyjatku
ERROR_STATUS_CODES: dict[type, int] = {
    OrderCannotBeCancelled: 409,
    NotFound: 404,
    Forbidden: 403,
    InvalidArgument: 400,
    InvalidState: 400,
    CatalogUnavailable: 503,
    StorageFailure: 500,
}


def status_code_for(exc: Exception) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    status_code = status_code_for(exc)
    content = {"detail": str(exc), "error_type": type(exc).__name__}
    if isinstance(exc, StorageFailure):
        content["retryable"] = exc.retryable
    return JSONResponse(status_code=status_code, content=content)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "invalid request",
            "error_type": InvalidArgument.__name__,
            "errors": errors,
        },
    )


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    #tekst bledu bazy tylko do logow
    logger.error(f"Unhandled storage error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "storage failure", "error_type": StorageFailure.__name__},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
