import os
from typing import Optional

from api import state
from extraction.task_extractor import TaskExtractor
from llm.llm_client import LLMClient, build_provider
from storage.task_store import TaskStore

# Configuration
MIN_INPUT_CHARS = int(os.getenv("MIN_INPUT_CHARS", "20"))

_extractor: Optional[TaskExtractor] = None


def get_extractor() -> TaskExtractor:
    global _extractor
    if _extractor is None:
        _extractor = TaskExtractor(llm_client=LLMClient(provider=build_provider()))
    return _extractor


def get_task_store() -> TaskStore:
    return state.task_store
