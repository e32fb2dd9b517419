"""HTTP client for the remote tenant directory."""

from collections.abc import AsyncGenerator
from typing import Any

import httpx

from remotable.config import settings
from remotable.errors import RemoteError, translate_errors
from remotable.logging import get_logger

logger = get_logger(__name__)


class RemoteClient:
    """
    Thin wrapper over an httpx client pointed at the tenant directory.

    Every transport failure leaves this class as one of the tags in
    remotable.errors.
    """

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def fetch_tenant(self, remote_id: int) -> dict[str, Any] | None:
        """
        Fetch a tenant by its remote id.

        Returns:
            The decoded JSON object, or None if the directory has no such tenant.

        Raises:
            RemoteError (or one of its tags) if the directory could not answer.
        """
        resource = f"tenant {remote_id}"
        with translate_errors(resource):
            response = await self.http.get(f"/tenants/{remote_id}")
            if response.status_code == httpx.codes.NOT_FOUND:
                logger.debug("Remote %s not found", resource)
                return None
            response.raise_for_status()

        try:
            payload = response.json()
        except ValueError as exc:
            raise RemoteError(f"{resource}: response is not JSON") from exc
        if not isinstance(payload, dict):
            raise RemoteError(f"{resource}: expected a JSON object")
        return payload


async def get_remote_client() -> AsyncGenerator[RemoteClient, None]:
    """Dependency that provides a RemoteClient for the configured directory."""
    async with httpx.AsyncClient(
        base_url=settings.remote_base_url,
        timeout=settings.remote_timeout_seconds,
    ) as http:
        yield RemoteClient(http)
