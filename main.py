import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journal_app.core.config import settings
from journal_app.core.database import database
from journal_app.core.exceptions import register_exception_handlers
from journal_app.core.logging_config import setup_logging
from journal_app.api.routers import analytics, auth, catalog, entries, export, users

setup_logging(level=settings.LOG_LEVEL, json_output=settings.LOG_JSON)
logger = logging.getLogger(__name__)


# =====================================================================
# DATABASE INITIALIZATION
# =====================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    database.open()
    yield
    database.close()


# =====================================================================
# CREATE APP
# =====================================================================

app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    description="Personal journal with moods, tags and writing statistics",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# =====================================================================
# HEALTH CHECK (before routers)
# =====================================================================


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "database_open": database.is_open}


# =====================================================================
# ROUTES
# =====================================================================

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(entries.router)
app.include_router(catalog.router)
app.include_router(analytics.router)
app.include_router(export.router)

logger.info("All routers included")


# =====================================================================
# ROOT ENDPOINT
# =====================================================================


@app.get("/")
def root():
    """API root endpoint."""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "auth": "/auth",
            "users": "/users",
            "entries": "/entries",
            "moods": "/moods",
            "tags": "/tags",
            "analytics": "/analytics",
            "export": "/export",
        },
    }
