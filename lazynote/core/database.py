import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from lazynote.core.config import settings

logger = logging.getLogger(__name__)


def _build_engine(url: str):
    if url.startswith("sqlite"):
        # One shared connection so the in-memory database survives across threads
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url)


engine = _build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(seed: bool = None) -> None:
    """Create all tables and optionally load the demo fixtures"""
    # Register models on Base.metadata
    import lazynote.models  # noqa: F401
    from lazynote.repositories.seed import seed_database

    Base.metadata.create_all(bind=engine)

    if seed is None:
        seed = settings.SEED_DEMO_DATA
    if seed:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()


def reset_db(seed: bool = True) -> None:
    """Drop and recreate every table (used by the test suite)"""
    import lazynote.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    init_db(seed=seed)
    logger.info("Database reset")
