"""Database engine and session factory."""

from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def build_connect_args(
    url: str | URL,
    *,
    connect_timeout: int | None = None,
    statement_timeout: float | None = None,
) -> dict[str, Any]:
    """DBAPI connect arguments for ``url``.

    Postgres connections get a connect timeout in seconds and a server-side
    statement timeout; zero or ``None`` leaves either unset.
    """
    parsed_url = make_url(url)
    backend = parsed_url.get_backend_name()
    if backend == "sqlite":
        return {"check_same_thread": False}
    if backend != "postgresql":
        return {}

    connect_args: dict[str, Any] = {}
    if connect_timeout:
        connect_args["connect_timeout"] = connect_timeout
    if statement_timeout:
        connect_args["options"] = f"-c statement_timeout={int(statement_timeout * 1000)}"
    return connect_args


def create_db_engine(
    url: str | URL,
    *,
    pool_size: int,
    pool_timeout: float,
    connect_timeout: int | None = None,
    statement_timeout: float | None = None,
) -> Engine:
    """Build an engine whose pool never grows past ``pool_size`` connections.

    Checkouts beyond capacity wait ``pool_timeout`` seconds and then fail.
    In-memory SQLite gets a single shared connection instead.
    """
    parsed_url = make_url(url)
    connect_args = build_connect_args(
        parsed_url,
        connect_timeout=connect_timeout,
        statement_timeout=statement_timeout,
    )
    if parsed_url.get_backend_name() == "sqlite" and parsed_url.database in (None, "", ":memory:"):
        return create_engine(parsed_url, connect_args=connect_args, poolclass=StaticPool)

    return create_engine(
        parsed_url,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=0,
        pool_timeout=pool_timeout,
        connect_args=connect_args,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``."""
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )
