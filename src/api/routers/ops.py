import os
import logging
from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import get_task_store
from api.metrics import TASKS_STORED
from storage.task_store import TaskStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(store: TaskStore = Depends(get_task_store)) -> dict:
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "profile": os.getenv("DEPLOYMENT_PROFILE", "unknown"),
        "remote_provider": os.getenv("REMOTE_PROVIDER", "webhook"),
        "tasks_stored": len(store),
    }


@router.get("/metrics")
async def metrics(store: TaskStore = Depends(get_task_store)) -> Response:
    """
    Prometheus scrape endpoint.
    """
    TASKS_STORED.set(len(store))
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
