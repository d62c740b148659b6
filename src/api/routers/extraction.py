import logging
import time

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from api.dependencies import MIN_INPUT_CHARS, get_extractor, get_task_store
from api.metrics import (
    REQUESTS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    EXTRACTIONS_TOTAL,
    REMOTE_FAILURES_TOTAL,
    TASKS_EXTRACTED_TOTAL,
    TASKS_STORED,
)
from care_assistant.errors import LocalPipelineFailure
from extraction.task_extractor import TaskExtractor
from storage.task_store import TaskStore

router = APIRouter()
logger = logging.getLogger(__name__)


class ExtractIn(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def long_enough(cls, v: str) -> str:
        if len(v.strip()) < MIN_INPUT_CHARS:
            raise ValueError(f"message must be at least {MIN_INPUT_CHARS} characters")
        return v


@router.post("/extract")
async def extract_tasks(
    payload: ExtractIn,
    extractor: TaskExtractor = Depends(get_extractor),
    store: TaskStore = Depends(get_task_store),
) -> dict:
    start = time.time()
    logger.info(f"Received patient input: {payload.message[:50]}...")

    try:
        result = await extractor.extract(payload.message)
    except LocalPipelineFailure as e:
        REQUESTS_TOTAL.labels(endpoint="/extract", status="error").inc()
        raise HTTPException(status_code=503, detail=str(e))

    await store.append(result.tasks)

    EXTRACTIONS_TOTAL.labels(path=result.path).inc()
    if result.fallback_reason:
        REMOTE_FAILURES_TOTAL.labels(reason=result.fallback_reason).inc()
    TASKS_EXTRACTED_TOTAL.inc(len(result.tasks))
    TASKS_STORED.set(len(store))
    REQUESTS_TOTAL.labels(endpoint="/extract", status=result.path).inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint="/extract").observe(time.time() - start)

    logger.info(f"Extracted {len(result.tasks)} task(s) via {result.path} processing")
    return result.to_json()
