"""SQLAlchemy models for the structured record store."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    Engine,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from ledgerbook.domain.errors import SchemaVersionError

DATABASE_NAME = "aibos_accounting"
SCHEMA_VERSION = 1

Base = declarative_base()


class Account(Base):
    """Chart-of-accounts table."""

    __tablename__ = "accounts"
    # AUTOINCREMENT keeps ids monotonic after deletes
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_number = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    active = Column(Boolean, nullable=False, default=True, index=True)
    balance = Column(Numeric(18, 2), nullable=False, default=0)


class Transaction(Base):
    """Journal table. Account ids are plain indexed integers, not foreign keys."""

    __tablename__ = "transactions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    reference_number = Column(String, nullable=False, unique=True, index=True)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    debit_account_id = Column(Integer, nullable=False, index=True)
    credit_account_id = Column(Integer, nullable=False, index=True)
    amount = Column(Numeric(18, 2), nullable=False)
    user_id = Column(Integer, nullable=False, default=1)


class User(Base):
    """Users table."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String, nullable=False, unique=True, index=True)
    first_name = Column(String, nullable=False, default="")
    last_name = Column(String, nullable=False, default="")
    role = Column(String, nullable=False, default="user")
    active = Column(Boolean, nullable=False, default=True)


class Setting(Base):
    """Settings table keyed by name."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=True)


def initialize_schema(engine: Engine) -> None:
    """Create tables and stamp the schema version.

    Raises:
        SchemaVersionError: If the database was written by a newer schema
    """
    is_sqlite = engine.dialect.name == "sqlite"
    version = 0
    if is_sqlite:
        with engine.connect() as conn:
            version = conn.exec_driver_sql("PRAGMA user_version").scalar() or 0
        if version > SCHEMA_VERSION:
            raise SchemaVersionError(
                f"Database schema version {version} is newer than supported version {SCHEMA_VERSION}"
            )

    Base.metadata.create_all(engine)

    if is_sqlite and version < SCHEMA_VERSION:
        with engine.begin() as conn:
            conn.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")


def create_session_factory(database_url: str) -> tuple[Engine, sessionmaker[Session]]:
    """Create an engine with an initialized schema and its session factory."""
    engine = create_engine(database_url, echo=False)
    try:
        initialize_schema(engine)
    except BaseException:
        engine.dispose()
        raise
    return engine, sessionmaker(bind=engine)
