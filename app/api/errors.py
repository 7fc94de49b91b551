"""Render account workflow errors as JSON responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.errors import AccountServiceError, FormValidationError


async def form_validation_error_handler(request: Request, exc: FormValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "errors": exc.errors},
    )


async def account_service_error_handler(request: Request, exc: AccountServiceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"errors": [exc.message]},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers; FormValidationError wins over its base class by MRO lookup."""
    app.add_exception_handler(FormValidationError, form_validation_error_handler)
    app.add_exception_handler(AccountServiceError, account_service_error_handler)
