"""
db/session.py — Database Connection & Session Management
=========================================================
Handles the async connection pool using SQLAlchemy.
Called by main.py on startup via init_db().

All route handlers use get_db() as a FastAPI dependency to get a DB session.
One request = one session = one transaction: service functions commit once at
the end of a flow, and anything that raises before that is rolled back here.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import inspect
from config import settings
import logging

logger = logging.getLogger("panchayat.db")


def normalize_url(url: str) -> str:
    """Convert a standard postgres:// URL to async postgresql+asyncpg://"""
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url.replace("postgresql://", "postgresql+asyncpg://", 1)


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine with the portal's connect timeout applied."""
    connect_args = kwargs.pop("connect_args", {"timeout": settings.DB_CONNECT_TIMEOUT})
    return create_async_engine(normalize_url(url), connect_args=connect_args, **kwargs)


# Pool sizing only applies to server databases
_pool_options = {} if settings.DATABASE_URL.startswith("sqlite") else {
    "pool_size": settings.DB_POOL_SIZE,
    "max_overflow": settings.DB_MAX_OVERFLOW,
}

# Create async engine
engine = build_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,   # logs all SQL in debug mode
    **_pool_options,
)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class all database models inherit from."""

    def to_dict(self) -> dict:
        """Plain-JSON view of the row, keyed by column name."""
        return {
            attr.columns[0].name: getattr(self, attr.key)
            for attr in inspect(self).mapper.column_attrs
        }


async def init_db(bind: AsyncEngine = None):
    """Create all tables on startup if they don't exist."""
    import db.models  # noqa — import triggers table registration
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created / verified.")


async def ping_db(bind: AsyncEngine = None) -> str:
    from sqlalchemy import text
    try:
        async with (bind or engine).connect() as conn:
            await conn.execute(text("SELECT 1"))
        return "ok"
    except Exception as e:
        logger.error(f"Database ping failed: {e}")
        return "unreachable"


async def get_db():
    """
    FastAPI dependency — yields a DB session per request.

    Usage in any route:
        from db.session import get_db
        from sqlalchemy.ext.asyncio import AsyncSession

        async def my_endpoint(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
