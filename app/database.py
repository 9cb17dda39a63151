from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

# Base class for all ORM models
Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for the configured database URL."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Required for SQLite to allow access from FastAPI's worker threads
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    # Each request gets its own DB session
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """FastAPI dependency that provides a DB session and ensures it's closed after use."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
