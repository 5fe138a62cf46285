import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from fastapi import FastAPI
from app.config import settings
from app.routers import attendance, auth, classrooms, seats
from app.db import init_database
from app.services.sweeper import OccupancySweeper
from app.utils.exception_handlers import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    "lifespan for initing database and running the occupancy sweeper"
    init_database()

    sweep_task = None
    if settings.SWEEPER_ENABLED:
        sweep_task = asyncio.create_task(OccupancySweeper().run_forever())
    yield

    if sweep_task is not None:
        sweep_task.cancel()
        with suppress(asyncio.CancelledError):
            await sweep_task
        logger.info("Occupancy sweeper stopped")


app = FastAPI(
    lifespan=lifespan,
    title="Classroom seats",
    description="Classroom seat reservations with schedule checks and attendance capture.",
    version="0.1.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)

register_exception_handlers(app)

app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(classrooms.router, prefix=settings.API_PREFIX)
app.include_router(seats.router, prefix=settings.API_PREFIX)
app.include_router(attendance.router, prefix=settings.API_PREFIX)
