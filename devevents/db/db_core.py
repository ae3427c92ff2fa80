"""Core database functionality and configuration.

This module provides the database handle used by the services: a lazily
connected engine behind a single-flight initialization guard, plus a
transactional session scope.
"""

from concurrent.futures import Future
from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os
import threading

from sqlalchemy import create_engine, Engine, inspect
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models import Base
from ..config.environment import IS_PRODUCTION_ENVIRONMENT

logger = logging.getLogger(__name__)

class DatabaseConfig:
    """Database configuration settings."""

    def __init__(
        self,
        url: Optional[str] = None,
        sqlite_path: Optional[Path] = None,
        echo: bool = False,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True
    ):
        """
        Initialize database configuration.

        In production environment, DATABASE_URL must be set in environment variables
        or provided explicitly via the url parameter. In development a SQLite file
        is used unless a URL is given.

        Args:
            url: Full SQLAlchemy connection URL.
                 If not provided, will use DATABASE_URL env variable
            sqlite_path: Path to SQLite database file (development fallback)
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool (permanent connections)
            max_overflow: Maximum number of extra connections to allow temporarily
                        (total connections = pool_size + max_overflow)
            pool_timeout: Seconds to wait for an available connection
            pool_recycle: Seconds before connections are recycled (prevent stale)
            pool_pre_ping: Whether to ping connections before using them

        Raises:
            ValueError: If in production environment and no database URL is provided
                      either via the url parameter or DATABASE_URL env variable
        """
        self.url = url or os.environ.get('DATABASE_URL')
        if not self.url and IS_PRODUCTION_ENVIRONMENT:
            raise ValueError(
                "Database URL must be provided either via url parameter "
                "or DATABASE_URL environment variable when in production environment"
            )
        self.sqlite_path = None if self.url else (
            sqlite_path or Path(__file__).parent.parent.parent / 'data' / 'events.db'
        )

        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping

    @property
    def connection_url(self) -> str:
        """Get the database connection URL."""
        if self.url:
            return self.url
        if not self.sqlite_path:
            raise ValueError("SQLite path not configured")
        return f"sqlite:///{self.sqlite_path}"

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.connection_url).get_backend_name() == 'sqlite'

    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration."""
        args = {"echo": self.echo}

        # SQLite-specific configuration
        if self.is_sqlite:
            args["connect_args"] = {"check_same_thread": False}
            args["poolclass"] = StaticPool

        # Server database configuration
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })

        return args

class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass

class ConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""
    pass

class SessionError(DatabaseError):
    """Raised when there are issues with database sessions."""
    pass

class Database:
    """Owned database handle with lazy, single-flight initialization.

    The engine is created the first time it is needed and then cached for the
    lifetime of the handle. Concurrent first callers wait on the same
    in-flight attempt; a failed attempt is discarded so the next caller
    starts over.
    """

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self._engine: Optional[Engine] = None
        self._pending: Optional[Future] = None
        self._lock = threading.Lock()
        self._session_factory = sessionmaker(expire_on_commit=False)

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def connect(self) -> Engine:
        """Return the engine, creating it on first use.

        Raises:
            ConnectionError: If the engine cannot be created or the schema
                cannot be verified. Every caller waiting on the same attempt
                receives the same error.
        """
        engine = self._engine
        if engine is not None:
            return engine

        with self._lock:
            if self._engine is not None:
                return self._engine
            pending = self._pending
            owner = pending is None
            if owner:
                pending = self._pending = Future()

        if not owner:
            return pending.result()

        try:
            engine = self._setup_engine()
        except BaseException as e:
            with self._lock:
                self._pending = None
            pending.set_exception(e)
            raise

        with self._lock:
            self._engine = engine
            self._pending = None
        pending.set_result(engine)
        return engine

    def _create_engine(self) -> Engine:
        return create_engine(
            self.config.connection_url,
            **self.config.get_engine_args()
        )

    def _setup_engine(self) -> Engine:
        """Create the engine, verify connectivity and make sure tables exist."""
        if self.config.sqlite_path:
            Path(self.config.sqlite_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            engine = self._create_engine()
        except Exception as e:
            raise ConnectionError(f"Failed to create database engine: {e}") from e

        try:
            self._ensure_tables_exist(engine)
        except Exception as e:
            engine.dispose()
            raise ConnectionError(f"Failed to initialize database: {e}") from e

        self._session_factory.configure(bind=engine)
        logger.info("Database connected successfully")
        return engine

    def _ensure_tables_exist(self, engine: Engine) -> None:
        """Ensure all required database tables exist."""
        existing_tables = set(inspect(engine).get_table_names())
        required_tables = set(Base.metadata.tables)

        if not required_tables.issubset(existing_tables):
            logger.info("Some tables missing, initializing database schema")
            Base.metadata.create_all(engine)
            logger.info("Database schema initialized successfully")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.

        Commits on success and rolls back on any error. Objects loaded in the
        session stay usable after it closes.

        Example:
            with db.session() as session:
                event = session.query(Event).filter(Event.slug == slug).first()

        Raises:
            ConnectionError: If the database cannot be reached
            SessionError: If the database rejects an operation
        """
        self.connect()

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """Release pooled connections. The next use reconnects."""
        with self._lock:
            engine, self._engine = self._engine, None
        if engine is not None:
            engine.dispose()
            logger.info("Database connections closed")
