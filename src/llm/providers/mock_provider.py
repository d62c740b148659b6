from __future__ import annotations
from typing import Any
from .base import LLMProvider

class MockProvider(LLMProvider):
    async def generate(self, *, message: str) -> Any:
        """
        Returns a canned payload in the {"tasks": [...]} shape based on the message content.
        """
        lowered = message.lower()
        tasks = []
        if "pill" in lowered or "medication" in lowered or "medicine" in lowered:
            tasks.append({"text": "Take medication", "category": "medication", "priority": "high"})
        if "call" in lowered or "phone" in lowered:
            tasks.append({"text": "Call family member", "category": "social"})
        if "doctor" in lowered or "appointment" in lowered:
            tasks.append({"text": "Attend doctor's appointment", "category": "appointment"})

        if not tasks:
            # Default fallback: prose the adapter has to read itself
            return {"response": f"1. {message.strip()}"}

        return {"tasks": tasks, "summary": f"Mock extraction found {len(tasks)} task(s)."}
