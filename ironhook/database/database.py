"""Database connection and session management."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ironhook.models import Base
from ironhook.utils.errors import ConfigurationError


# Engine name -> SQLAlchemy dialect+driver
SUPPORTED_ENGINES: Dict[str, str] = {
    "sqlite": "sqlite",
    "postgres": "postgresql",
    "mysql": "mysql+pymysql",
    "sqlserver": "mssql+pyodbc",
}

SQLITE_MEMORY_DSN = ":memory:"


@dataclass
class DatabaseConfig:
    """Database configuration settings."""

    engine: str = "sqlite"
    dsn: str = SQLITE_MEMORY_DSN
    echo: bool = False

    @property
    def is_sqlite_memory(self) -> bool:
        return self.engine == "sqlite" and self.dsn in ("", SQLITE_MEMORY_DSN)

    @property
    def url(self) -> str:
        """Generate SQLAlchemy database URL."""
        dialect = SUPPORTED_ENGINES.get(self.engine)
        if dialect is None:
            raise ConfigurationError(
                message=(
                    f"Unsupported database engine: {self.engine}. "
                    "Recover by retrying with one of the documented database engines"
                ),
                details={"supported": sorted(SUPPORTED_ENGINES)},
            )

        if self.engine == "sqlite":
            return f"sqlite:///{self.dsn or SQLITE_MEMORY_DSN}"
        return f"{dialect}://{self.dsn}"


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one service instance.

    Each instance is independent so several services (or tests) can run
    side by side against different databases.
    """

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()

        engine_kwargs: Dict[str, Any] = {"echo": self.config.echo}
        if self.config.is_sqlite_memory:
            # one shared connection, otherwise every session sees an empty database
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        elif self.config.engine != "sqlite":
            engine_kwargs["pool_pre_ping"] = True

        self.engine: Engine = create_engine(self.config.url, **engine_kwargs)
        self.session_factory: sessionmaker[Session] = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a session for a single unit of work.

        Commits on success, rolls back on exception.
        """
        session = self.session_factory()

        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def init_db(self) -> None:
        """
        Create all tables.

        Use the Alembic migrations for production databases.
        """
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        """Dispose of the engine's connection pool."""
        self.engine.dispose()
