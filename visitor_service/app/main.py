# app/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, SessionLocal, engine
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from shared.data.seed_data import seed_all
from shared.models import users, staff_members, locations, role_configuration, email_template
from .models import visitors, custom_fields, system_settings
from .router import (
    custom_fields_router,
    locations_router,
    role_configuration_router,
    settings_router,
    staff_router,
    visitors_router,
)

logger = logging.getLogger(__name__)
logging.getLogger().setLevel(settings.LOG_LEVEL)

# Create all tables
Base.metadata.create_all(bind=engine)


def run_startup_seed():
    # a failed seed must not keep the service from serving traffic
    db = SessionLocal()
    try:
        seed_all(db)
    except Exception:
        db.rollback()
        logger.exception("Seeding at startup failed, continuing without seed data")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_ON_STARTUP:
        run_startup_seed()
    yield


# This MUST exist for uvicorn
app = FastAPI(title="Visitor Service API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom JSON response wrapper middleware
app.add_middleware(JsonResponseMiddleware)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(visitors_router.router)
app.include_router(locations_router.router)
app.include_router(staff_router.router)
app.include_router(custom_fields_router.router)
app.include_router(role_configuration_router.router)
app.include_router(settings_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}
