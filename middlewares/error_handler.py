import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from schemas.common import ErrorDetail, ErrorResponse
from services.errors import EvaluationAppError

logger = logging.getLogger(__name__)


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def add_error_handlers(app: FastAPI):
    @app.exception_handler(EvaluationAppError)
    async def app_error_handler(request: Request, exc: EvaluationAppError):
        logger.warning(f"{request.method} {request.url.path} → {exc.code}: {exc.message}")
        return _error(exc.status_code, exc.code, exc.message)

    # any database failure that escaped a router is still a one-line notice
    @app.exception_handler(SQLAlchemyError)
    async def remote_store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"{request.method} {request.url.path} database error: {exc}")
        return _error(503, "REMOTE_STORE_ERROR", "The data store is unavailable. Please try again.")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} failed")
        return _error(500, "INTERNAL_ERROR", str(exc))
