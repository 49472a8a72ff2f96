from catalog.core.env import load_env
load_env()

from catalog.core.config import settings
from catalog.core.logging import configure_logging, get_logger
configure_logging(settings.LOG_LEVEL)

import datetime
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from catalog.api.router import api_router
from catalog.core.errors import setup_error_handlers
from catalog.db.deps import get_db
from catalog.integrations.redis.client import close_redis, init_redis
from catalog.middleware.logging import logging_middleware

logger = get_logger(__name__)

# Record process start time for uptime reporting
_START_TIME = time.time()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_redis()
    yield
    close_redis()


app = FastAPI(title="Course Catalog API", lifespan=lifespan)

setup_error_handlers(app)
app.middleware("http")(logging_middleware)

app.include_router(api_router, prefix="/v1")


@app.get("/health")
async def health():
    """Simple health endpoint returning status, uptime, and timestamp."""
    uptime = time.time() - _START_TIME
    payload = {
        "status": "ok",
        "uptime_seconds": round(uptime, 2),
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }
    return JSONResponse(content=payload)


@app.get("/db/health")
def db_health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"db": "ok"}


logger.info("fastapi process started")
