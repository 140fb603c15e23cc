from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from agrimandi.core.config import settings


def make_engine(database_url: str):
    connect_args = {}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args["check_same_thread"] = False

    engine = create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
        future=True,
    )

    if is_sqlite:
        # Take the write lock when the transaction opens so concurrent
        # writers wait on the busy timeout instead of failing on lock upgrade.
        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


engine = make_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True,
)

Base = declarative_base()


# Dependency injected into routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
