# backend/dosage_api/services/patients.py
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dosage_api.db import Patient
from dosage_api.errors import StoreError
from dosage_api.schemas import PatientCreate

log = logging.getLogger("patients")


def create_patient(db: Session, payload: PatientCreate) -> Patient:
    patient = Patient(
        name=payload.name,
        weight_kg=payload.weight_kg,
        age_years=payload.age_years,
    )
    try:
        db.add(patient)
        db.commit()
        db.refresh(patient)
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Failed to create patient: %s", e)
        raise StoreError(f"Failed to create patient: {e}") from e
    log.info("Created patient %s", patient.id)
    return patient


def list_patients(db: Session) -> List[Patient]:
    try:
        return db.query(Patient).order_by(Patient.id).all()
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to list patients: {e}") from e
