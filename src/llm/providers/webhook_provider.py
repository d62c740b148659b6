from __future__ import annotations
import os
from typing import Any, Optional

import httpx

from care_assistant.errors import RemoteUnavailable
from .base import LLMProvider

class WebhookProvider(LLMProvider):
    """POSTs ``{"message": ...}`` to an extraction webhook and returns its JSON body."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = (url if url is not None else os.getenv("REMOTE_EXTRACTION_URL", "")).strip()
        self.timeout_s = timeout_s if timeout_s is not None else float(os.getenv("REMOTE_TIMEOUT_S", "15"))
        self._transport = transport

    async def generate(self, *, message: str) -> Any:
        if not self.url:
            raise RemoteUnavailable("REMOTE_EXTRACTION_URL is not configured")

        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
            r = await client.post(
                self.url,
                headers={"Content-Type": "application/json"},
                json={"message": message},
            )
            r.raise_for_status()
            return r.json()
