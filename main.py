"""
Main application entry point for the Contacts API.

This module initializes the FastAPI application, configures logging and
CORS, creates database tables on startup, registers the handlers that
render errors as ``{"errors": {...}}`` bodies, and includes the routers
for authentication, users, contacts and addresses.

Modules:
- FastAPI: Web framework
- CORSMiddleware: Middleware for handling CORS
- app.database: Database engine
- app.models: SQLAlchemy models
- app.errors: Application error types
- app.auth: Registration, login and logout router
- app.users: Current user router
- app.contacts: Contacts router
- app.addresses: Addresses router
- app.core: Application settings
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.database import engine
from app import models, contacts, addresses
from app.auth import router as auth_router
from app.users import router as users_router
from app.core import get_settings
from app.errors import AppError, UnauthorizedError, ValidationError
from app.logging_config import setup_logging

settings = get_settings()
setup_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Creates missing tables before the first request is served.
    """
    models.Base.metadata.create_all(bind=engine)
    logger.info("Contacts API started")
    yield


# Initialize FastAPI application
app = FastAPI(title="Contacts API", lifespan=lifespan)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def validation_message(error: dict) -> tuple[str, str]:
    """
    Turn one pydantic error into a ``(field, message)`` pair.

    Args:
        error (dict): Entry of ``RequestValidationError.errors()``.

    Returns:
        tuple[str, str]: Field name and human readable message.
    """
    kind = error.get("type")
    ctx = error.get("ctx") or {}
    loc = [
        str(part)
        for part in error.get("loc", ())
        if part not in ("body", "query", "path")
    ]

    # Errors about the body as a whole have no field to point at
    if kind == "json_invalid":
        return "message", "The request body must be valid JSON."
    if not loc:
        if kind == "missing":
            return "message", "The request body is required."
        return "message", "The request body must be a JSON object."

    field = loc[0]
    label = field.replace("_", " ")
    if kind == "missing" or (kind == "string_type" and error.get("input") is None):
        return field, f"The {label} field is required."
    if kind == "string_too_short" and ctx.get("min_length") == 1:
        return field, f"The {label} field is required."
    if kind == "string_too_long":
        return field, (
            f"The {label} field must not be greater than "
            f"{ctx['max_length']} characters."
        )
    if kind == "value_error" and field == "email":
        return field, "The email field must be a valid email address."
    return field, error.get("msg", "Invalid value")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render request validation failures as 400 with per-field messages."""
    messages: dict[str, list[str]] = {}
    for error in exc.errors():
        field, message = validation_message(error)
        messages.setdefault(field, []).append(message)
    return await app_error_handler(request, ValidationError(messages))


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render application errors with the status code they carry."""
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code, content=exc.to_dict(), headers=headers
    )


# Include routers for application areas
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(contacts.router)
app.include_router(addresses.router)


@app.get("/")
def root():
    """
    Root endpoint for the API.

    Returns a simple JSON message directing users to the Swagger UI.

    Returns:
        dict: JSON message with information about the API
    """
    return {"msg": "Contacts API. Visit /docs for Swagger UI"}
