from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from stockflow.config import settings
from stockflow.utils.logs import get_logger

log = get_logger("db")


def build_engine(url: str, **kwargs) -> Engine:
    """
    Create an engine for ``url``. SQLite connections are shared with FastAPI's
    worker threads, so the same-thread check is switched off for them.
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    return create_engine(url, future=True, echo=False, **kwargs)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db(reset: bool = False, bind: Optional[Engine] = None):
    """
    Create any missing tables. Existing tables and their rows are left alone
    unless ``reset`` is set, in which case everything is dropped first; that
    path is meant for local development and CI only.
    """
    # populate Base.metadata
    import stockflow.models  # noqa: F401

    bind = bind or engine
    if reset:
        log.warning("Dropping all tables (RESET_DB enabled)")
        Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)
    log.info("Database initialized (%s)", bind.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
