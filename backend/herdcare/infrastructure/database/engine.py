from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from ...core.config import settings

# Table models must be imported before create_all
from . import models  # noqa: F401


def create_db_engine(database_url: str | None = None, echo: bool = False) -> Engine:
    """Build an engine; in-memory SQLite shares one connection across sessions."""
    url = database_url or settings.DATABASE_URL
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo, pool_pre_ping=True)


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)
