"""
main.py — Gram Panchayat Portal Entry Point
============================================
This is the file you run to start the entire system.
It does 3 things in order:
    1. Creates the FastAPI app
    2. Connects the database
    3. Registers all API route modules

Run with:
    uvicorn main:app --reload --host 0.0.0.0 --port 8000

Or simply:
    python main.py
"""

import logging
import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from config import settings

# ── Database ──────────────────────────────────────────────────────────────────
from db.session import init_db, ping_db, engine

# ── Core systems ──────────────────────────────────────────────────────────────
from core.crypto import crypto_engine          # password hashing / session tokens

# ── API Routers (one per role / resource group) ──────────────────────────────
from api.errors import register_error_handlers
from api.routes_auth import router as auth_router
from api.routes_admin import router as admin_router
from api.routes_citizens import router as citizens_router
from api.routes_employees import router as employees_router
from api.routes_monitors import router as monitors_router
from api.routes_records import router as records_router
from api.routes_dashboard import router as dashboard_router


# ── Logging setup ─────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    handlers=[
        logging.StreamHandler(),                          # print to terminal
        logging.FileHandler(settings.LOG_FILE),           # also save to file
    ],
)
logger = logging.getLogger("panchayat.main")


# ── Lifespan: runs on startup and shutdown ────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Everything BEFORE yield → runs on startup.
    Everything AFTER yield  → runs on shutdown.
    """

    # ── STARTUP ──────────────────────────────────────────────────────────
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # 1. Initialize database — creates tables if they don't exist yet
    logger.info("Connecting to database...")
    await init_db()
    logger.info("✓ Database ready")

    # 2. Session signing
    if crypto_engine.is_ready() != "ok":
        logger.warning("JWT_SECRET_KEY / NEXTAUTH_SECRET is not set — using the insecure default")

    logger.info("=" * 50)
    logger.info(f"  {settings.APP_NAME} is LIVE on port {settings.PORT}")
    logger.info("=" * 50)

    yield   # ← App runs here (handles all requests)

    # ── SHUTDOWN ──────────────────────────────────────────────────────────
    logger.info("Shutting down — closing connections...")
    await engine.dispose()
    logger.info("✓ Shutdown complete")


# ── Create the FastAPI app ────────────────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Citizen services for the Gram Panchayat: schemes, taxes, records",
    docs_url="/docs",          # Swagger UI at http://localhost:8000/docs
    redoc_url="/redoc",        # ReDoc UI at http://localhost:8000/redoc
    lifespan=lifespan,
)


# ── Middleware ─────────────────────────────────────────────────────────────────
# CORS — allows the portal frontend to talk to this API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Security — only accept requests from known hosts in production
if settings.ENVIRONMENT == "production":
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.TRUSTED_HOSTS,
    )

register_error_handlers(app)


# ── Register all routers ──────────────────────────────────────────────────────
# Each router is a group of related endpoints defined in api/routes_*.py

app.include_router(auth_router,      prefix="/api/auth",      tags=["Auth"])
app.include_router(admin_router,     prefix="/api/admin",     tags=["Admin"])
app.include_router(citizens_router,  prefix="/api/citizens",  tags=["Citizens"])
app.include_router(employees_router, prefix="/api/employees", tags=["Employees"])
app.include_router(monitors_router,  prefix="/api/monitors",  tags=["Monitors"])
app.include_router(records_router,   prefix="/api/records",   tags=["Records"])
app.include_router(dashboard_router, prefix="/api/dashboard", tags=["Dashboard"])


# ── Root endpoint ─────────────────────────────────────────────────────────────
@app.get("/", tags=["Status"])
async def root():
    """Health check — confirms the API is running."""
    return {
        "system": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "operational",
        "docs": "/docs",
    }


@app.get("/health-check", tags=["Status"])
async def health_check():
    """Deep health check — confirms the database answers and sessions can be signed."""
    return {
        "api": "ok",
        "database": await ping_db(),
        "sessions": crypto_engine.is_ready(),
    }


# ── Run directly ──────────────────────────────────────────────────────────────
if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,    # auto-reload on file changes in dev mode
        log_level=settings.LOG_LEVEL.lower(),
    )
