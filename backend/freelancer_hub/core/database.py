import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from freelancer_hub.core.config import settings
from freelancer_hub.models import Base


logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in {"sqlite://", "sqlite+pysqlite://"}:
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


engine = create_db_engine(settings.database_url, echo=settings.echo_sql)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Optional[Engine] = None) -> None:
    # Create tables in dev/test without running Alembic
    if settings.env in {"dev", "test"} or bind is not None:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Schema created for env=%s", settings.env)


def drop_db(bind: Optional[Engine] = None) -> None:
    Base.metadata.drop_all(bind=bind or engine)
    logger.info("Schema dropped")
