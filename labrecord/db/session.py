# labrecord/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from labrecord.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # SQLite connections are shared across FastAPI's threadpool
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create missing tables (alembic owns the schema in deployments)."""
    from labrecord.db import Base

    Base.metadata.create_all(bind=engine)
