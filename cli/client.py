"""Signed HTTP client that uploads temperature aggregates to the remote store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx

from app.schemas import TemperaturePayload
from services.tokens import TokenError, issue_token
from settings import Settings

logger = logging.getLogger(__name__)

UPLOAD_TIMEOUT = 10.0
PROBE_TIMEOUT = 5.0


class UploadOutcome(str, Enum):
    """Terminal classification of one upload attempt."""

    success = "success"
    bad_request = "bad_request"
    unauthorized = "unauthorized"
    forbidden = "forbidden"
    not_found = "not_found"
    unexpected_status = "unexpected_status"
    transport_error = "transport_error"
    token_error = "token_error"
    serialization_error = "serialization_error"
    skipped = "skipped"


@dataclass(frozen=True)
class UploadResult:
    outcome: UploadOutcome
    status_code: Optional[int] = None
    body: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is UploadOutcome.success


class UploadClient:
    """Signed single-shot HTTP client for the remote temperature store."""

    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None) -> None:
        self._settings = settings
        self._client = client or httpx.Client(
            timeout=UPLOAD_TIMEOUT, verify=settings.verify_tls
        )

    def close(self) -> None:
        self._client.close()

    def probe(self) -> bool:
        """Return True when the store answers at all, whatever the status."""
        base_url = self._settings.base_url
        try:
            response = self._client.get(base_url, timeout=PROBE_TIMEOUT)
        except httpx.HTTPError as exc:
            logger.error(
                "Cannot reach remote store: %s", exc, extra={"url": base_url}
            )
            return False
        logger.info(
            "Remote store is reachable",
            extra={"url": base_url, "status": response.status_code},
        )

        try:
            root = self._client.get(f"{base_url}/", timeout=PROBE_TIMEOUT)
        except httpx.HTTPError:
            logger.debug("OpenAPI root did not answer", extra={"url": base_url})
        else:
            logger.info("OpenAPI root available", extra={"status": root.status_code})
        return True

    def send(
        self, payload: TemperaturePayload, reading_count: Optional[int] = None
    ) -> UploadResult:
        """POST one aggregate. Every outcome is terminal; nothing is retried."""
        url = self._settings.endpoint_url
        try:
            body = payload.model_dump_json()
        except (TypeError, ValueError) as exc:
            logger.error("JSON encoding failed: %s", exc)
            return UploadResult(UploadOutcome.serialization_error, error=str(exc))

        try:
            token = issue_token(self._settings.jwt_secret)
        except TokenError as exc:
            logger.error("Token generation failed: %s", exc)
            return UploadResult(UploadOutcome.token_error, error=str(exc))

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }
        try:
            response = self._client.post(url, content=body, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Connection failed: %s", exc, extra={"url": url})
            return UploadResult(UploadOutcome.transport_error, error=str(exc))

        return self._classify(response, body, payload, reading_count)

    def _classify(
        self,
        response: httpx.Response,
        body: str,
        payload: TemperaturePayload,
        reading_count: Optional[int],
    ) -> UploadResult:
        status = response.status_code
        text = response.text

        if status in (httpx.codes.OK, httpx.codes.CREATED):
            logger.info(
                "SUCCESS: %s sensors aggregated, average %.2f°C sent to store",
                reading_count if reading_count is not None else "?",
                payload.temperature_avg,
                extra={"truck_id": payload.truck_id, "status": status},
            )
            outcome = UploadOutcome.success
        elif status == httpx.codes.BAD_REQUEST:
            logger.error(
                "ERROR 400: bad request. Payload: %s Response: %s", body, text
            )
            outcome = UploadOutcome.bad_request
        elif status == httpx.codes.UNAUTHORIZED:
            logger.error("ERROR 401: token authentication failed. Response: %s", text)
            outcome = UploadOutcome.unauthorized
        elif status == httpx.codes.FORBIDDEN:
            logger.error("ERROR 403: permission denied. Response: %s", text)
            outcome = UploadOutcome.forbidden
        elif status == httpx.codes.NOT_FOUND:
            logger.error(
                "ERROR 404: endpoint not found, check that the table exists. Response: %s",
                text,
                extra={"url": self._settings.endpoint_url},
            )
            outcome = UploadOutcome.not_found
        else:
            logger.error("HTTP %d: %s", status, text, extra={"status": status})
            outcome = UploadOutcome.unexpected_status

        return UploadResult(outcome, status_code=status, body=text)
