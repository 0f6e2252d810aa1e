"""Causes backend client.

Thin async adapter over the backend's health and participant endpoints.
Callers only learn success or failure; no retries are attempted here.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from stride.shared.core.configuration import ServiceConfig

logger = logging.getLogger(__name__)


class CausesClient:
    """Health probe and participant creation against the Causes backend."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or ServiceConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )

    async def perform_health_check(self) -> bool:
        """Return True when the backend answers the health endpoint with 2xx."""
        try:
            resp = await self._client.get(self.config.health_path)
        except httpx.HTTPError as e:
            logger.warning(f"CausesClient: health check failed: {e}")
            return False

        if resp.is_success:
            logger.debug(f"CausesClient: health check ok ({resp.status_code})")
            return True
        logger.warning(f"CausesClient: health check returned {resp.status_code}")
        return False

    async def create_participant(self, identity: str) -> bool:
        """Register the logged-in user as a challenge participant."""
        try:
            resp = await self._client.post(self.config.participants_path, json={"fbid": identity})
        except httpx.HTTPError as e:
            logger.warning(f"CausesClient: participant creation for {identity} failed: {e}")
            return False

        if resp.is_success:
            logger.info(f"CausesClient: participant {identity} created")
            return True
        logger.warning(f"CausesClient: participant creation for {identity} returned {resp.status_code}")
        return False

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "CausesClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
