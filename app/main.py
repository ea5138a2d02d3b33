from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api import router
from logging_config import configure_logging


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    # PostgREST answers malformed rows with 400, not FastAPI's 422.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Malformed request body.", "details": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Mock Temperature Store",
        description="PostgREST-shaped stand-in that accepts signed temperature aggregates.",
        version="0.1.0",
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(router)
    return app

app = create_app()
