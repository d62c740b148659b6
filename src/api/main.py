import logging
import os

from fastapi import FastAPI

from api.routers import extraction, ops, tasks

# Logging configuration
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Care Assistant")

app.include_router(extraction.router)
app.include_router(tasks.router)
app.include_router(ops.router)

logger.info(f"Care Assistant API ready (remote provider: {os.getenv('REMOTE_PROVIDER', 'webhook')})")
