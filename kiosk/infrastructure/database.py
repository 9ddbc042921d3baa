import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from kiosk.core.config import settings

logger = logging.getLogger(__name__)

def _make_engine(url: str):
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    # SQLite is used for local runs and tests; in-memory databases must share
    # one connection across threads or every session sees an empty schema.
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)

engine = _make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
Base = declarative_base()

def init_db() -> None:
    from kiosk.domain import models  # registers tables
    Base.metadata.create_all(bind=engine)
    logger.info("✅ DB connected and tables created.")
