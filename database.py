"""
Database engine and session management for CarePair

The engine is created by the application lifespan (see app.py) and kept on
``app.state``; request handlers receive a session through ``get_db``.
"""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from config import settings


logger = logging.getLogger(__name__)

# Base class for ORM models
Base = declarative_base()


def create_db_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.
    Defaults come from settings.
    """
    url = database_url or settings.DATABASE_URL
    echo = settings.DATABASE_ECHO if echo is None else echo
    
    if url.startswith("sqlite"):
        # SQLite specific configuration
        connect_args = {"check_same_thread": False, "timeout": 30}
        if ":memory:" in url:
            engine = create_engine(
                url,
                connect_args=connect_args,
                poolclass=StaticPool,
                echo=echo
            )
        else:
            engine = create_engine(url, connect_args=connect_args, echo=echo)
        
        # Enable foreign keys for SQLite
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        # PostgreSQL or other databases
        engine = create_engine(
            url,
            echo=echo,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True
        )
    
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to the engine"""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine
    )


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency for FastAPI routes to get database session.
    Automatically closes session after request.
    
    Usage:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for database session.
    Use this for scripts or non-FastAPI contexts.
    
    Usage:
        with session_scope(SessionFactory) as db:
            db.query(Item).all()
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """
    Initialize database tables.
    Creates all tables defined in models.
    """
    # Import models to register them with Base
    import models  # noqa: F401
    
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialized at: {engine.url.render_as_string(hide_password=True)}")


def drop_db(engine: Engine) -> None:
    """
    Drop all database tables.
    WARNING: This will delete all data!
    """
    import models  # noqa: F401
    
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")


def reset_db(engine: Engine) -> None:
    """
    Reset database by dropping and recreating all tables.
    WARNING: This will delete all data!
    """
    drop_db(engine)
    init_db(engine)
    logger.info("Database reset complete")


class DatabaseHealthCheck:
    """Database health check utilities"""
    
    @staticmethod
    def is_connected(engine: Engine) -> bool:
        """Check if database is connected"""
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("Database health check failed")
            return False


# Export commonly used items
__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "get_db",
    "session_scope",
    "init_db",
    "drop_db",
    "reset_db",
    "DatabaseHealthCheck"
]
