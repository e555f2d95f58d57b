from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from jewelry_store.core.config import settings


def create_db_engine(url: str, pool_size: int = 10, pool_timeout: int = 30) -> Engine:
    """Engine with a bounded pool: at most ``pool_size`` connections, no overflow."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        pool_size=pool_size,
        max_overflow=0,
        pool_timeout=pool_timeout,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


engine = create_db_engine(settings.DATABASE_URL, settings.DB_POOL_SIZE, settings.DB_POOL_TIMEOUT)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


class Base(DeclarativeBase):
    pass
