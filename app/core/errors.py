"""Error taxonomy shared by the CRUD service, the aggregation service and the API."""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


class ProcurementError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "procurement_error"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "detail": self.message}


class NotFoundError(ProcurementError):
    """Raised when a requested record does not exist."""

    code = "not_found"
    http_status = 404


class ValidationError(ProcurementError):
    """Raised when input fails schema constraints. Carries itemized field errors."""

    code = "validation_error"
    http_status = 400

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def from_pydantic(
        cls, exc: PydanticValidationError | RequestValidationError, message: str = "Validation error"
    ) -> "ValidationError":
        return cls(message, errors=_itemize(exc.errors()))

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class InternalError(ProcurementError):
    """Raised for unexpected persistence failures. Never retried."""

    code = "internal_error"
    http_status = 500


def _itemize(raw_errors: Any) -> list[dict[str, Any]]:
    """Reduce pydantic error dicts to JSON-safe {loc, msg, type} items."""
    items = []
    for err in raw_errors:
        items.append(
            {
                "loc": [str(part) for part in err.get("loc", ())],
                "msg": str(err.get("msg", "")),
                "type": str(err.get("type", "")),
            }
        )
    return items


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy to HTTP responses (404 / 400 / 500)."""

    @app.exception_handler(ProcurementError)
    async def handle_procurement_error(request: Request, exc: ProcurementError):
        if exc.http_status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        err = ValidationError.from_pydantic(exc)
        return JSONResponse(status_code=err.http_status, content=err.to_dict())
