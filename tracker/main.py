import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.core.settings import settings
from tracker.domains.access.routes import router as access_router
from tracker.domains.deliverables.routes import router as deliverables_router
from tracker.domains.expenses.routes import router as expenses_router
from tracker.domains.raid.routes import router as raid_router
from tracker.domains.resources.routes import router as resources_router
from tracker.domains.timesheets.routes import router as timesheets_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    logger.info(f"{settings.APP_NAME} starting")
    yield
    # Shutdown
    logger.info(f"{settings.APP_NAME} stopping")


app = FastAPI(
    title=settings.APP_NAME,
    description="Authorization and approval-routing API for project tracking",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(access_router, prefix=settings.API_PREFIX)
app.include_router(expenses_router, prefix=settings.API_PREFIX)
app.include_router(timesheets_router, prefix=settings.API_PREFIX)
app.include_router(deliverables_router, prefix=settings.API_PREFIX)
app.include_router(raid_router, prefix=settings.API_PREFIX)
app.include_router(resources_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": f"{settings.APP_NAME} is running"}


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}
