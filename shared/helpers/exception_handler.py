import logging

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.orm.exc import StaleDataError

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode
from shared.utils.exceptions import ConflictError, VisitorAppError

logger = logging.getLogger(__name__)


def _failure(message: str, status_code: str, http_status: int) -> JSONResponse:
    wrapped = JsonOutResult(
        data=None,
        status="Failure",
        status_code=status_code,
        message=message
    ).model_dump()
    return JSONResponse(content=wrapped, status_code=http_status)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(VisitorAppError)
    async def visitor_app_exception_handler(request: Request, exc: VisitorAppError):
        logger.info(
            f"{request.method} {request.url.path} -> {exc.http_status}: {exc.message}")
        return _failure(exc.message, exc.status_code, exc.http_status)

    @app.exception_handler(StaleDataError)
    async def stale_data_exception_handler(request: Request, exc: StaleDataError):
        logger.warning(f"Concurrent update detected on {request.url.path}")
        conflict = ConflictError()
        return _failure(conflict.message, conflict.status_code, conflict.http_status)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # error_response() already packs a JsonOutResult into the detail
        if isinstance(exc.detail, dict) and "status_code" in exc.detail:
            return JSONResponse(content=exc.detail, status_code=exc.status_code, headers=exc.headers)
        return _failure(str(exc.detail), str(exc.status_code), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = JsonOutResult(
            data=[{"loc": list(e.get("loc", [])), "msg": e.get("msg")}
                  for e in exc.errors()],
            status="Failure",
            status_code=AppStatusCode.INVALID_INPUT,
            message="Request validation failed"
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=422)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.url.path}")
        return _failure("Internal Server Error", AppStatusCode.OPERATION_FAILED, 500)
