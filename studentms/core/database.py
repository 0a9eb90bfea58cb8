from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from studentms.core.logger import logger


class Base(DeclarativeBase):
    pass


def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str) -> Engine:
    engine = create_engine(url=url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def build_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        class_=Session,
        expire_on_commit=False,
        autoflush=False,
    )


@contextmanager
def get_db(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    with session_factory() as session:
        logger.debug("Database session opened")
        try:
            yield session
        finally:
            logger.debug("Database session closed")
