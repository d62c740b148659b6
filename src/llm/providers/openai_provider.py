from __future__ import annotations
import json
import os
from typing import Any, Optional

import httpx

from llm.prompts import EXTRACTION_SYSTEM_PROMPT
from .base import LLMProvider

class OpenAIProvider(LLMProvider):
    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = os.getenv("OPENAI_API_KEY", "").strip()
        self.model = os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()
        self.base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip()
        self.timeout_s = float(os.getenv("REMOTE_TIMEOUT_S", "15"))
        self._transport = transport

        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY is missing")

    async def generate(self, *, message: str) -> Any:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
            "temperature": 0.2,
            "response_format": {"type": "json_object"},
        }

        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
            r = await client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()

        content = data["choices"][0]["message"]["content"]
        # models occasionally answer in prose; the adapter reads numbered lists from plain text
        try:
            return json.loads(content)
        except ValueError:
            return content
