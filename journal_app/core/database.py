import logging
import threading
from contextlib import contextmanager
from typing import Callable, Generator, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from journal_app.core.config import Base, settings
from journal_app.core.exceptions import StoreUnavailableError
import journal_app.models  # noqa: F401  (registers every table on Base.metadata)

logger = logging.getLogger(__name__)

Initializer = Callable[[Session], None]


class Database:
    """
    Lazily opened handle to the journal database.

    ``open()`` may be called from many threads at once; engine creation,
    schema creation and the registered initializers run exactly once.
    """

    def __init__(self, url: str, initializers: Optional[List[Initializer]] = None):
        self.url = url
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._lock = threading.Lock()
        self._initializers: List[Initializer] = list(initializers or [])

    # =====================================================================
    # LIFECYCLE
    # =====================================================================

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def add_initializer(self, initializer: Initializer) -> None:
        """Register a one-time setup step (seeding). Runs now if already open."""
        with self._lock:
            self._initializers.append(initializer)
            if self._engine is None:
                return
            self._run_initializers([initializer], self._session_factory)

    def open(self) -> Engine:
        """Open the database if needed and return the engine."""
        if self._engine is not None:
            return self._engine

        with self._lock:
            if self._engine is None:
                engine = None
                try:
                    engine = self._create_engine()
                    Base.metadata.create_all(bind=engine)
                    factory = sessionmaker(
                        bind=engine,
                        autoflush=False,
                        expire_on_commit=False,
                    )
                    self._run_initializers(self._initializers, factory)
                except SQLAlchemyError as exc:
                    logger.exception("Database setup failed for %s", self.url)
                    if engine is not None:
                        engine.dispose()
                    raise StoreUnavailableError("Could not set up database") from exc

                self._session_factory = factory
                # Publish last so other threads never see a half-initialized handle
                self._engine = engine
                logger.info("Database ready at: %s", self.url)

        return self._engine

    def close(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None
            self._session_factory = None

    # =====================================================================
    # SESSIONS
    # =====================================================================

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Unit of work: commit on success, roll back on any error."""
        self.open()
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # =====================================================================
    # HELPERS
    # =====================================================================

    def _create_engine(self) -> Engine:
        if not self.url.startswith("sqlite"):
            return create_engine(self.url)

        kwargs = {"connect_args": {"check_same_thread": False}}
        if self.url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(self.url, **kwargs)

    @staticmethod
    def _run_initializers(initializers: List[Initializer], factory: sessionmaker) -> None:
        for initializer in initializers:
            db = factory()
            try:
                initializer(db)
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()


database = Database(settings.DATABASE_URL)
