"""Exception-to-HTTP mapping shared by every router."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.shared.errors import ConflictError

_LOCATION_MARKERS = ("body", "query", "path", "header", "cookie")


def first_message(messages) -> str:
    """The first human-readable message in a Protean error payload."""
    if isinstance(messages, dict):
        for value in messages.values():
            return first_message(value)
        return "Invalid request"
    if isinstance(messages, (list, tuple)):
        return first_message(messages[0]) if messages else "Invalid request"
    return str(messages)


def _error_body(exc: ValidationError) -> dict:
    return {"error": first_message(exc.messages), "errors": exc.messages}


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content=_error_body(exc))

    @app.exception_handler(ConflictError)
    async def conflict_error(request: Request, exc: ConflictError):
        return JSONResponse(status_code=409, content=_error_body(exc))

    @app.exception_handler(ObjectNotFoundError)
    async def not_found(request: Request, exc: ObjectNotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc) or "Not found"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        fields = {}
        for error in exc.errors():
            loc = list(error.get("loc", ()))
            if loc and loc[0] in _LOCATION_MARKERS:
                loc = loc[1:]
            location = [str(part) for part in loc]
            fields.setdefault(".".join(location) or "request", []).append(error.get("msg", "Invalid value"))
        return JSONResponse(status_code=400, content={"error": "Invalid request", "errors": fields})
