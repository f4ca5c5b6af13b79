from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging
from domain.errors import AppError

logger = logging.getLogger(__name__)

LOCATION_PREFIXES = {"body", "path", "query", "header", "cookie"}


def validation_payload(exc: RequestValidationError) -> dict:
    errors = exc.errors()
    if not errors:
        return {"message": "Invalid request", "field": ""}
    first = errors[0]
    loc = list(first.get("loc", ()))
    if loc and loc[0] in LOCATION_PREFIXES:
        loc = loc[1:]
    return {"message": first.get("msg", "Invalid request"), "field": ".".join(str(p) for p in loc)}


def attach_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=validation_payload(exc))

    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled: %s", exc)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
