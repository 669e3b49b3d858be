import os

from dotenv import find_dotenv, load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

env_path = find_dotenv()
if env_path:
    load_dotenv(env_path)

DEFAULT_MYSQL_URL = "mysql+pymysql://user:password@db:3306/food_expiry_db"
DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_MYSQL_URL)
DB_TIMEOUT_SECONDS = int(os.getenv("DB_TIMEOUT_SECONDS", "10"))


def build_connect_args(url: str, timeout: int = DB_TIMEOUT_SECONDS) -> dict:
    """Driver arguments for the request timeout of the given backend."""
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": timeout}
    if url.startswith("mysql+pymysql"):
        return {
            "connect_timeout": timeout,
            "read_timeout": timeout,
            "write_timeout": timeout,
        }
    return {}


def enable_sqlite_foreign_keys(target: Engine) -> None:
    # SQLite ignores ON DELETE/ON UPDATE CASCADE unless this is set per connection
    if target.dialect.name != "sqlite":
        return

    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def make_engine(url: str, timeout: int = DB_TIMEOUT_SECONDS) -> Engine:
    """Engine whose driver enforces ``timeout`` seconds on each request.

    The module-level engine uses ``DB_TIMEOUT_SECONDS``; callers needing a
    different request timeout build their own engine and session factory.
    """
    target = create_engine(
        url,
        connect_args=build_connect_args(url, timeout),
        pool_pre_ping=True,
    )
    enable_sqlite_foreign_keys(target)
    return target


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
