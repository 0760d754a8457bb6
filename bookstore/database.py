import logging
from contextlib import contextmanager

from sqlmodel import SQLModel, create_engine, Session
from bookstore.config import settings

logger = logging.getLogger(__name__)


def build_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        url,
        echo=False,
        connect_args=connect_args,
        pool_pre_ping=True,      # checks dead connections
        pool_recycle=1800,       # refresh every 30 min
    )


engine = build_engine(settings.database_url)


def create_db_and_tables(bind=None):
    from bookstore import models  # noqa: F401  registers every table
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    with Session(engine) as session:
        yield session


@contextmanager
def transaction(session: Session):
    """
    Run a block of writes as one unit.

    Commits when the block exits cleanly, rolls back on any exception
    (including aborts raised into the generator) and re-raises.
    """
    try:
        yield session
        session.commit()
    except BaseException:
        session.rollback()
        logger.debug("Transaction rolled back")
        raise
