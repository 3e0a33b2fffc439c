import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI

from courtside.config import settings
from courtside.routers import analysis, games, health, slip
from courtside.services.schedule_service import refresh_schedule

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

scheduler = AsyncIOScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SCHEDULE_REFRESH_MINUTES > 0:
        scheduler.add_job(
            refresh_schedule,
            "interval",
            minutes=settings.SCHEDULE_REFRESH_MINUTES,
            id="refresh_schedule",
            replace_existing=True,
        )
        scheduler.start()
    yield
    if scheduler.running:
        scheduler.shutdown()


app = FastAPI(title="Courtside IQ", lifespan=lifespan)

app.include_router(health.router)
app.include_router(games.router)
app.include_router(analysis.router)
app.include_router(slip.router)
