from typing import Optional

from peewee import Database, DatabaseProxy, Model
from playhouse.db_url import connect

from core.logging import get_logger

# Bound once at process start by init_db(); tests bind an in-memory database.
db = DatabaseProxy()

log = get_logger("db")


class BaseModel(Model):
    class Meta:
        database = db


def all_models() -> list[type[Model]]:
    """Every model the platform writes to, in foreign key dependency order."""
    from .models import (
        Player,
        OweType,
        Match,
        Leg,
        LegParameters,
        Player2Leg,
        Score,
        Owe,
        RecalculationRun,
    )
    from .models.statistics import STATISTICS_MODELS

    return [
        # Dimension tables
        Player, OweType,
        # Match structure
        Match, Leg, LegParameters, Player2Leg,
        # Score ledger
        Score,
        # Owe ledger
        Owe,
        # Audit
        RecalculationRun,
        # Derived statistics, one table per variant
        *STATISTICS_MODELS,
    ]


def bind_database(database: Database) -> None:
    """Point every model at `database`."""
    db.initialize(database)


# Function to initialize database connection
def init_db(database_url: Optional[str] = None) -> Database:
    """Initialize database connection and create tables if they don't exist."""
    if database_url is None:
        from core.settings import settings
        database_url = settings.database_url

    database = connect(database_url)
    bind_database(database)
    db.connect(reuse_if_open=True)

    # safe=True is idempotent
    db.create_tables(all_models(), safe=True)
    log.info("database_initialized", tables=len(all_models()))
    return database


# Function to close database connection
def close_db() -> None:
    """Close database connection."""
    if not db.is_closed():
        db.close()
        log.info("database_closed")
