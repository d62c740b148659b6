from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from care_assistant.errors import RemoteUnavailable
from llm.providers.base import LLMProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteSuccess:
    payload: Any


@dataclass(frozen=True)
class RemoteFailure:
    reason: str
    detail: str = ""


RemoteResult = Union[RemoteSuccess, RemoteFailure]


def build_provider(name: Optional[str] = None) -> Optional[LLMProvider]:
    """Provider selected by REMOTE_PROVIDER (webhook, openai, mock or none)."""
    name = (name or os.getenv("REMOTE_PROVIDER", "webhook")).strip().lower()
    if name == "webhook":
        from llm.providers.webhook_provider import WebhookProvider
        return WebhookProvider()
    if name == "openai":
        from llm.providers.openai_provider import OpenAIProvider
        return OpenAIProvider()
    if name == "mock":
        from llm.providers.mock_provider import MockProvider
        return MockProvider()
    if name in {"none", "local", ""}:
        return None
    raise ValueError(f"Unknown REMOTE_PROVIDER: {name}")


class LLMClient:
    """Makes the single remote extraction attempt for one input.

    Never raises for remote problems: every failure comes back as a
    RemoteFailure so the caller can fall back to local extraction.
    """

    def __init__(self, provider: Optional[LLMProvider] = None, timeout_s: Optional[float] = None):
        self.provider = provider
        self.timeout_s = timeout_s if timeout_s is not None else float(os.getenv("REMOTE_TIMEOUT_S", "15"))

    async def request(self, message: str) -> RemoteResult:
        if self.provider is None:
            return RemoteFailure("disabled", "no remote provider configured")

        try:
            payload = await asyncio.wait_for(
                self.provider.generate(message=message), timeout=self.timeout_s
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            return RemoteFailure("timeout", f"no response within {self.timeout_s}s")
        except RemoteUnavailable as e:
            return RemoteFailure("unavailable", str(e))
        except httpx.HTTPStatusError as e:
            return RemoteFailure("status", f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            return RemoteFailure("network", str(e) or type(e).__name__)
        except ValueError as e:
            return RemoteFailure("decode", str(e))
        except Exception as e:
            logger.exception("Unexpected error from remote provider")
            return RemoteFailure("error", str(e))

        return RemoteSuccess(payload)
