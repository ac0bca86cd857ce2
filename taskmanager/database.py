# taskmanager/database.py

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class StartupError(RuntimeError):
    """The database could not be opened or initialized."""


def make_engine(database_url: str, echo: bool = False) -> Engine:
    # For SQLite we must add connect_args
    connect_args = {}
    kwargs = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        # in-memory databases live as long as their single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    return create_engine(
        database_url,
        connect_args=connect_args,
        echo=echo,
        **kwargs,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create missing tables. Raises StartupError if the database is unusable."""
    # registers Task on Base.metadata before create_all
    from taskmanager.models.task import Task  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as exc:
        logger.critical("database_init_failed", extra={"url": str(engine.url)})
        raise StartupError(f"Failed to initialize database at {engine.url}") from exc

    logger.info("Database ready at %s", engine.url)
