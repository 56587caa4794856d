"""HTTP adapter for the generation endpoint."""
from __future__ import annotations

import logging
from typing import AsyncContextManager, Optional

import httpx

from ..models import UPLOAD_ENDPOINT, MultipartPayload

logger = logging.getLogger(__name__)


class HTTPGenerationClient:
    """
    HTTP client adapter for the generation endpoint.

    Implements IGenerationEndpoint protocol. Requests are sent once; there is
    no retry, and the default timeout of None waits for the server forever.
    """

    def __init__(
        self,
        base_url: str,
        endpoint: str = UPLOAD_ENDPOINT,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    def submit(self, payload: MultipartPayload) -> AsyncContextManager[httpx.Response]:
        if not self._client:
            raise RuntimeError("HTTPGenerationClient not initialized. Use 'async with' context.")

        logger.debug(
            "POST %s%s fields=%s",
            self._base_url,
            self._endpoint,
            payload.field_names,
        )
        return self._client.stream(
            "POST",
            self._endpoint,
            files=payload.files,
            data=payload.data,
        )
