"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fabricnest.application.config import validation_details
from fabricnest.domain import NestingErrorKind


class NestingFailedError(Exception):
    """Raised when the engine rejects a nesting request."""

    def __init__(
        self,
        errors: list[str],
        error_kind: NestingErrorKind | None = None,
        piece_id: str | None = None,
    ) -> None:
        self.errors = errors
        self.error_kind = error_kind
        self.piece_id = piece_id
        super().__init__(f"Nesting failed: {errors}")

    @property
    def error_type(self) -> str:
        return self.error_kind.value if self.error_kind else "invalid_input"


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(NestingFailedError)
    async def nesting_failed_handler(
        request: Request, exc: NestingFailedError
    ) -> JSONResponse:
        details = [{"message": e} for e in exc.errors]
        if exc.piece_id is not None:
            for detail in details:
                detail["piece_id"] = exc.piece_id
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.errors[0] if exc.errors else "Nesting failed",
                "error_type": exc.error_type,
                "details": details,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Rejected values are not echoed back: JSON cannot carry Infinity or NaN.
        errors = [
            {**error, "loc": tuple(error["loc"])[1:]}
            if tuple(error["loc"])[:1] == ("body",)
            else error
            for error in exc.errors()
        ]
        details = [
            {key: detail[key] for key in ("path", "location", "message")}
            for detail in validation_details(errors, exc.body)
        ]
        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid nesting request",
                "error_type": "validation",
                "details": details,
            },
        )
