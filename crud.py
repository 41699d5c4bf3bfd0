"""
Store operations for moisture readings.

Each function issues a single statement through the given session and turns
any SQLAlchemy failure into a StorageError carrying the driver's message.
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from errors import StorageError
from logger import get_logger
from models import Reading
from utils import utc_now

console = get_logger("waterboy.crud")


def create_reading(db: Session, pot_id: str, location: Optional[str],
                   raw_value: float, moisture_percent: float) -> Reading:
    reading = Reading(
        pot_id=pot_id,
        location=location or None,
        raw_value=raw_value,
        moisture_percent=moisture_percent,
    )
    try:
        db.add(reading)
        db.commit()
        db.refresh(reading)
    except SQLAlchemyError as e:
        db.rollback()
        console.exception(f"Error saving reading for pot {pot_id}")
        raise StorageError("Failed to save reading", str(e)) from e
    return reading


def get_pot_history(db: Session, pot_id: str, limit: int = 100) -> List[Reading]:
    stmt = (
        select(Reading)
        .where(Reading.pot_id == pot_id)
        .order_by(Reading.timestamp.desc(), Reading.id.desc())
        .limit(limit)
    )
    try:
        return list(db.scalars(stmt).all())
    except SQLAlchemyError as e:
        console.exception(f"Error fetching readings for pot {pot_id}")
        raise StorageError("Failed to fetch readings", str(e)) from e


def get_latest_per_pot(db: Session) -> List[Reading]:
    # Ties on timestamp go to the highest id; other stores may pick differently.
    ranked = select(
        Reading,
        func.row_number()
        .over(partition_by=Reading.pot_id, order_by=[Reading.timestamp.desc(), Reading.id.desc()])
        .label("row_rank"),
    ).subquery()
    latest = aliased(Reading, ranked)
    stmt = select(latest).where(ranked.c.row_rank == 1).order_by(latest.pot_id)
    try:
        return list(db.scalars(stmt).all())
    except SQLAlchemyError as e:
        console.exception("Error fetching latest readings")
        raise StorageError("Failed to fetch latest readings", str(e)) from e


def list_pots(db: Session):
    """
    One row per (pot_id, location) pair with its reading count and most
    recent timestamp. A pot that moved shows up once per location.
    """
    stmt = (
        select(
            Reading.pot_id,
            Reading.location,
            func.count(Reading.id).label("reading_count"),
            func.max(Reading.timestamp).label("last_reading"),
        )
        .group_by(Reading.pot_id, Reading.location)
        .order_by(Reading.pot_id, Reading.location)
    )
    try:
        return db.execute(stmt).all()
    except SQLAlchemyError as e:
        console.exception("Error fetching pots")
        raise StorageError("Failed to fetch pots", str(e)) from e


def delete_readings_older_than(db: Session, days: float) -> int:
    try:
        cutoff = utc_now() - timedelta(days=days)
    except OverflowError:
        if days > 0:
            # cutoff falls before the earliest representable date: nothing is that old
            console.info(f"No readings can be older than {days} days")
            return 0
        cutoff = datetime.max.replace(tzinfo=timezone.utc)
    stmt = delete(Reading).where(Reading.timestamp < cutoff)
    try:
        result = db.execute(stmt, execution_options={"synchronize_session": False})
        deleted = result.rowcount
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        console.exception("Error cleaning up readings")
        raise StorageError("Failed to cleanup readings", str(e)) from e
    console.info(f"Deleted {deleted} readings older than {cutoff.isoformat()}")
    return deleted
