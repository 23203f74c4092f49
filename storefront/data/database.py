# storefront/data/database.py
from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.domain.errors import StorageFailure, StoreError
from storefront.utils.settings import DATABASE_URL, DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_ECHO
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        #jedno wspolne polaczenie, baza in-memory zyje tak dlugo jak ono
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "pool_timeout": 30,
    }


engine = create_engine(DATABASE_URL, echo=DB_ECHO, **_engine_options(DATABASE_URL))


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if engine.dialect.name == "sqlite":
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    #modele musza byc zaimportowane zanim create_all zobaczy tabele
    import storefront.data.models  # noqa: F401

    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)


@contextmanager
def transaction(db: Session, action: str) -> Iterator[Session]:
    """Blok jako jedna jednostka: commit po sukcesie, rollback po kazdym bledzie.

    Bledy sterownika ida do logow i wychodza jako ``StorageFailure``
    z ogolnym komunikatem. Bledy domenowe z bloku robia rollback
    i leca dalej bez zmian.
    """
    try:
        yield db
        db.commit()
    except StoreError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Transaction '{action}' rolled back: {e}")
        raise StorageFailure(
            f"failed to {action}",
            retryable=isinstance(e, OperationalError),
        ) from e
    except BaseException:
        db.rollback()
        raise
