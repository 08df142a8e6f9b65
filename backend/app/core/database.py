import math
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from app.core.config import settings

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    pool_recycle=300,
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for SQLAlchemy models
Base = declarative_base()


@event.listens_for(Engine, "connect")
def register_sqlite_functions(dbapi_connection, connection_record):
    """Give SQLite the math functions the distance formula needs.

    PostgreSQL and MySQL ship these natively. SQLite only has them when
    compiled with SQLITE_ENABLE_MATH_FUNCTIONS, and never has LEAST or GREATEST.
    """
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    for name, fn in (
        ("acos", math.acos),
        ("cos", math.cos),
        ("sin", math.sin),
        ("radians", math.radians),
        ("degrees", math.degrees),
    ):
        dbapi_connection.create_function(name, 1, _null_safe(fn), deterministic=True)
    dbapi_connection.create_function("least", 2, _null_safe(min), deterministic=True)
    dbapi_connection.create_function("greatest", 2, _null_safe(max), deterministic=True)


def _null_safe(fn):
    # SQL semantics: any NULL argument yields NULL
    def wrapper(*args):
        if any(arg is None for arg in args):
            return None
        return fn(*args)
    return wrapper


# Dependency to get database session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
