"""Translation of errors into JSON responses."""

from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.responses import JSONResponse

from src.users_api.api.http.deps import get_app_config
from src.users_api.core.errors import StoreError, UsersApiError


def format_validation_errors(errors: Sequence[Any]) -> list[dict[str, Any]]:
    """Flatten pydantic error dicts into one entry per failing parameter.

    Each entry has ``value`` (the rejected input, ``None`` when missing),
    ``msg``, ``param`` (field name) and ``location`` (``body``, ``path``...).
    """
    formatted = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        location = str(loc[0]) if loc else "body"
        # Undecodable JSON is reported at a character offset, not a field
        is_json_error = error.get("type") == "json_invalid"
        if is_json_error or len(loc) < 2 or isinstance(loc[-1], int):
            param = location
        else:
            param = str(loc[-1])
        value = None if error.get("type") == "missing" else error.get("input")
        formatted.append(
            {
                "value": value,
                "msg": error.get("msg"),
                "param": param,
                "location": location,
            }
        )
    return formatted


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.bind(params=[e["param"] for e in errors]).info("Request validation failed")
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"errors": errors}),
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    config = get_app_config(request)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "sql": exc.sql if config.api.expose_sql_errors else None,
        },
    )


async def api_error_handler(request: Request, exc: UsersApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    # StoreError is more specific than UsersApiError and is looked up first
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(UsersApiError, api_error_handler)
