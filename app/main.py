"""
FastAPI Main Application with Scheduler
Fulfillment scoring service for WisdomOS life areas
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from app.config import settings
from app.core.logging import setup_logging
from app.infrastructure.db.database import init_db, close_db
from app.api.routes import health, insights, life_areas
from app.scheduler.scheduler import start_scheduler, shutdown_scheduler

# Configure logging
setup_logging(
    level=settings.LOG_LEVEL,
    log_file=settings.LOG_FILE,
    max_bytes=settings.LOG_MAX_BYTES,
    backup_count=settings.LOG_BACKUP_COUNT,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown of all services
    """
    # ===================
    # STARTUP
    # ===================
    logger.info("=" * 60)
    logger.info("🚀 Starting WisdomOS Scoring Service")
    logger.info("=" * 60)

    await init_db()
    logger.info("✅ Database initialized")

    if settings.SCHEDULER_ENABLED:
        try:
            start_scheduler()
        except Exception as e:
            logger.error(f"❌ Failed to start scheduler: {e}")
    else:
        logger.info("⏰ Scheduler disabled")

    logger.info(f"   ✅ API Server: http://{settings.API_HOST}:{settings.API_PORT}")
    logger.info(f"   ✅ Scoring window: {settings.SCORING_WINDOW_DAYS} days")

    yield

    # ===================
    # SHUTDOWN
    # ===================
    logger.info("🛑 Shutting down WisdomOS Scoring Service...")
    shutdown_scheduler()
    await close_db()
    logger.info("✅ Shutdown complete")


app = FastAPI(
    title="WisdomOS Scoring Service",
    description="Fulfillment score calculation for life areas",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(life_areas.router, prefix="/api/v1/life-areas", tags=["Life Areas"])
app.include_router(insights.router, prefix="/api/v1/insights", tags=["Insights"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
