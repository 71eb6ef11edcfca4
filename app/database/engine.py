from sqlmodel import create_engine, SQLModel, Session
from sqlmodel.pool import StaticPool
from typing import Any, Dict, Generator
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")

def _engine_options(url: str) -> Dict[str, Any]:
    if url.startswith("sqlite"):
        options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        # Every connection must see the same in-memory database
        if url in IN_MEMORY_URLS:
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }

engine = create_engine(
    DATABASE_URL,
    echo=settings.DB_ECHO,
    **_engine_options(DATABASE_URL)
)

def create_db_and_tables():
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready")

def dispose_engine():
    engine.dispose()
    logger.info("Database engine disposed")

def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
