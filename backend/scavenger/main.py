from __future__ import annotations
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from scavenger.config import settings
from scavenger.db import SessionLocal
from scavenger.errors import install_error_handlers
from scavenger.logging_setup import configure_logging
from scavenger.routes.system import router as system_router
from scavenger.routes.auth import router as auth_router
from scavenger.routes.hunt import router as hunt_router
from scavenger.routes.game import router as game_router
from scavenger.routes.submissions import router as submissions_router
from scavenger.routes.media import router as media_router
from scavenger.routes.admin import router as admin_router
from scavenger.services.locations import seed_default_locations
import structlog

configure_logging()
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    log.info("startup", env=settings.environment, version=settings.app_version, git_sha=settings.git_sha)
    if settings.seed_locations:
        try:
            async with SessionLocal() as session:
                added = await seed_default_locations(session)
            if added:
                log.info("locations_seeded", count=added)
        except SQLAlchemyError as e:
            log.error("locations_seed_failed", error=str(e))
    yield
    # Shutdown
    log.info("shutdown")

app = FastAPI(
    title=f"{settings.app_display_name} API",
    version=settings.app_version,
    lifespan=lifespan,
    description=f"{settings.app_display_name} API: clues, progress, photo submissions and admin review",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Include routers
app.include_router(system_router)
app.include_router(auth_router)
app.include_router(hunt_router)
app.include_router(game_router)
app.include_router(submissions_router)
app.include_router(media_router)
app.include_router(admin_router)

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    structlog.contextvars.bind_contextvars(request_id=rid)
    try:
        response: Response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()
    response.headers["X-Request-ID"] = rid
    return response
