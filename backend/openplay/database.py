"""
Storage engine for session snapshots.

Settings come from the environment (a .env file is honoured):
  DATABASE_URL   default sqlite:///./openplay.db
  SQL_ECHO       true/1/yes to log every statement
"""
import os
from pathlib import Path
from typing import Generator, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./openplay.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for url.

    SQLite connections are shared across request threads. An in-memory
    database is pinned to a single connection so every session sees the
    same tables; a file database gets its parent directory created.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url:
        kwargs["poolclass"] = StaticPool
    else:
        Path(url.replace("sqlite:///", "", 1)).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=echo, **kwargs)


engine: Engine = build_engine(DATABASE_URL, echo=SQL_ECHO)


def get_session() -> Generator[Session, None, None]:
    """Request-scoped database session"""
    with Session(engine) as session:
        yield session


def init_db(bind: Optional[Engine] = None) -> None:
    """Create the playsession table if it does not exist yet"""
    # SessionRecord must be imported so it is registered with SQLModel metadata
    from openplay.models.session_record import SessionRecord  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
