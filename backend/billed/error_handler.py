import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from billed.bills.exceptions import ReceiptValidationError
from billed.common.exceptions import InvalidSessionError, StoreError

logger = logging.getLogger(__name__)


def store_error_detail(exc: Exception) -> str:
    if isinstance(exc, StoreError):
        return str(exc)
    return f"Erreur: {exc}"


def exception_handler(app: FastAPI) -> None:
    """
    Registers global exception handlers for the FastAPI application.
    Translates domain exceptions into HTTP responses.
    """

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(f"Store call failed for {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": store_error_detail(exc), "status": exc.status},
        )

    @app.exception_handler(InvalidSessionError)
    async def invalid_session_handler(request: Request, exc: InvalidSessionError):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": exc.message},
        )

    @app.exception_handler(ReceiptValidationError)
    async def receipt_validation_handler(request: Request, exc: ReceiptValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": exc.message},
        )
