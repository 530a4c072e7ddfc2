"""
Handlers globais de exceção para erros consistentes na API.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.scheduling.errors import InvalidTimeFormatError, LookupFailureError, UnknownUnitError


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _error(request: Request, status_code: int, body: Dict[str, Any]) -> JSONResponse:
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("agenda.errors")

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return _error(request, exc.status_code, {"message": exc.detail or "HTTP error"})

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        return _error(request, 422, {"message": "Validation error", "errors": jsonable_encoder(exc.errors())})

    @app.exception_handler(InvalidTimeFormatError)
    async def _time_format_handler(request: Request, exc: InvalidTimeFormatError):
        return _error(request, 422, {"message": str(exc)})

    @app.exception_handler(UnknownUnitError)
    async def _unknown_unit_handler(request: Request, exc: UnknownUnitError):
        return _error(request, 404, {"message": str(exc)})

    @app.exception_handler(LookupFailureError)
    async def _lookup_handler(request: Request, exc: LookupFailureError):
        log.warning("Falha de consulta request_id=%s: %s", _req_id(request), exc)
        return _error(request, 503, {"message": "Banco de dados indisponível. Tente novamente."})

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error request_id=%s", _req_id(request))
        return _error(request, 500, {"message": "Internal server error"})
