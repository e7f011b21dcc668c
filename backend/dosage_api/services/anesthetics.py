# backend/dosage_api/services/anesthetics.py
import logging
import threading
from typing import Iterable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dosage_api.db import Anesthetic
from dosage_api.errors import StoreError
from dosage_api.schemas import AnestheticCreate

log = logging.getLogger("anesthetics")

_seed_lock = threading.Lock()  # serializes the empty-check and the insert


def _to_row(payload: AnestheticCreate) -> Anesthetic:
    return Anesthetic(
        name=payload.name,
        max_dose_mg_per_kg=payload.max_dose_mg_per_kg,
        common_concentrations=list(payload.common_concentrations),
    )


def create_anesthetic(db: Session, payload: AnestheticCreate) -> Anesthetic:
    anesthetic = _to_row(payload)
    try:
        db.add(anesthetic)
        db.commit()
        db.refresh(anesthetic)
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Failed to create anesthetic: %s", e)
        raise StoreError(f"Failed to create anesthetic: {e}") from e
    log.info("Created anesthetic %s (%s)", anesthetic.id, anesthetic.name)
    return anesthetic


def list_anesthetics(db: Session) -> List[Anesthetic]:
    try:
        return db.query(Anesthetic).order_by(Anesthetic.id).all()
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to list anesthetics: {e}") from e


def seed_default_anesthetics(db: Session, catalog: Iterable[AnestheticCreate]) -> List[Anesthetic]:
    """
    Insert `catalog` only when the anesthetics table is empty.

    If anything is already there the existing rows are returned untouched,
    so calling this repeatedly never duplicates entries. The check and the
    insert run under a process-wide lock; separate server processes sharing
    one database are not serialized against each other.
    """
    with _seed_lock:
        existing = list_anesthetics(db)
        if existing:
            return existing

        rows = [_to_row(entry) for entry in catalog]
        try:
            db.add_all(rows)
            db.commit()
            for row in rows:
                db.refresh(row)
        except SQLAlchemyError as e:
            db.rollback()
            log.error("Failed to seed anesthetics: %s", e)
            raise StoreError(f"Failed to seed anesthetics: {e}") from e
    log.info("Seeded %d default anesthetics", len(rows))
    return rows
