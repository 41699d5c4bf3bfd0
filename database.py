from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from config import settings
from logger import get_logger

console = get_logger("waterboy.database")


def _engine_kwargs() -> dict:
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}

    kwargs = {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
    }
    if settings.db_statement_timeout_ms > 0:
        # bounds every statement issued on a pooled connection
        kwargs["connect_args"] = {
            "options": f"-c statement_timeout={settings.db_statement_timeout_ms}"
        }
    return kwargs


engine = create_engine(settings.database_url, **_engine_kwargs())
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection() -> bool:
    """Run a trivial query; log the outcome instead of raising."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        console.error(f"Error connecting to database: {e}")
        return False
    console.info(f"Connected to database at {engine.url.render_as_string(hide_password=True)}")
    return True


def create_tables():
    # imported for its side effect of registering the mapping on Base
    import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def dispose_engine():
    engine.dispose()
    console.info("Database connection pool closed")
