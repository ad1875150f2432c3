from __future__ import annotations

import logging
from typing import Any

import httpx

from . import config
from .errors import ProfileFetchError

logger = logging.getLogger(__name__)


class ProfileClient:
    """POSTs a profile URL to the import service and returns its JSON body."""

    def __init__(
        self,
        endpoint: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint or config.IMPORT_ENDPOINT
        self.timeout = timeout if timeout is not None else config.IMPORT_TIMEOUT
        self.transport = transport

    async def fetch_profile(self, profile_url: str) -> dict[str, Any]:
        logger.info("Requesting profile data for %s", profile_url)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(self.endpoint, json={"profileUrl": profile_url})
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                message = f"{status} {exc.response.reason_phrase}: {error_detail(exc.response)}"
                raise ProfileFetchError(message, status_code=status) from exc
            except httpx.TransportError as exc:
                raise ProfileFetchError(f"Network error: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProfileFetchError("Import service returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise ProfileFetchError("Import service returned an unexpected response")
        if isinstance(payload.get("data"), dict):
            return payload["data"]
        return payload


def error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()[:200]
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return ""
