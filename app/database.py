import logging
import os
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()

T = TypeVar("T")

DEFAULT_DATABASE_URL = "postgresql://localhost/contractor_backoffice"
IDLE_RECYCLE_SECONDS = 60


def _get_database_url() -> str:
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


def _get_pool_size() -> int:
    return int(os.getenv("PG_CONNECTION_LIMIT", "10"))


def _get_pool_timeout() -> float:
    return float(os.getenv("PG_POOL_TIMEOUT", "30"))


class Database:
    """
    Owns the connection pool. Built once at startup, handed to every service
    explicitly, disposed at shutdown.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: float = 30,
        pool_recycle: int = IDLE_RECYCLE_SECONDS,
    ):
        self.url = url
        self.engine = create_engine(
            url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
            pool_pre_ping=True,
        )
        self._sessionmaker = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_env(cls) -> "Database":
        return cls(
            _get_database_url(),
            pool_size=_get_pool_size(),
            pool_timeout=_get_pool_timeout(),
        )

    def session(self) -> Session:
        return self._sessionmaker()

    def query(self, sql: str, params: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        """Run one statement with bound parameters and return rows as dicts."""
        with self.engine.begin() as conn:
            result = conn.execute(text(sql), params or {})
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings()]

    def with_transaction(self, fn: Callable[[Session], T]) -> T:
        """
        Run fn(session) inside BEGIN/COMMIT on a single pooled connection.

        Any exception from fn (or from COMMIT) rolls back and is re-raised.
        The session is closed and its connection released on every path.
        """
        db = self.session()
        try:
            result = fn(db)
            db.commit()
            return result
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def ping(self) -> str:
        rows = self.query("SELECT current_database() AS name")
        return rows[0]["name"]

    def dispose(self) -> None:
        self.engine.dispose()
