from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any

class LLMProvider(ABC):
    @abstractmethod
    async def generate(self, *, message: str) -> Any:
        """
        Must return the decoded response payload (JSON value or plain text).
        Raise on transport errors, non-2xx status or an undecodable body;
        LLMClient turns any of those into a RemoteFailure.
        """
        raise NotImplementedError
