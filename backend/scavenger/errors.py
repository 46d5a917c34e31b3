from __future__ import annotations
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

log = structlog.get_logger()

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"message": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Missing/invalid fields are a 400 for the browser client
    return JSONResponse(
        {"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
        status_code=400,
    )

async def unhandled_exception_handler(request: Request, exc: Exception):
    # Runs outside the request-id middleware, whose contextvars are already cleared
    rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
    log.exception("unhandled_error", path=request.url.path, method=request.method, request_id=rid)
    headers = {"X-Request-ID": rid} if rid else None
    return JSONResponse({"message": "Internal server error"}, status_code=500, headers=headers)

def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
