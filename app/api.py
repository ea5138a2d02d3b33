"""HTTP routes of the mock PostgREST temperature store."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.schemas import TemperaturePayload, TemperatureRecord
from datastore.mock_table import MockTemperatureTable, build_default_table
from services.tokens import DEFAULT_ROLE, TokenClaims, TokenError, verify_token
from settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_table() -> MockTemperatureTable:
    return build_default_table()


def get_store_settings() -> Settings:
    return get_settings()


def require_sensor_role(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_store_settings),
) -> TokenClaims:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = verify_token(credentials.credentials, settings.jwt_secret)
    except TokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc
    if claims.role != DEFAULT_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role {claims.role!r} may not write temperatures.",
        )
    return claims


@router.post(
    "/currenttemperature",
    status_code=status.HTTP_201_CREATED,
    response_model=TemperatureRecord,
    summary="Store one aggregated temperature reading.",
)
async def create_temperature(
    payload: TemperaturePayload,
    _claims: TokenClaims = Depends(require_sensor_role),
    table: MockTemperatureTable = Depends(get_table),
) -> TemperatureRecord:
    record = table.insert(payload)
    logger.info(
        "Stored temperature %.2f",
        record.temperature_avg,
        extra={"truck_id": record.truck_id},
    )
    return record


@router.get(
    "/currenttemperature",
    response_model=list[TemperatureRecord],
    summary="List stored temperature readings.",
)
async def list_temperatures(
    table: MockTemperatureTable = Depends(get_table),
) -> list[TemperatureRecord]:
    return table.scan()


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
