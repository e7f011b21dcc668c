# backend/dosage_api/services/dosage.py
import logging
import math
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dosage_api.db import Anesthetic, DosageCalculation, Patient
from dosage_api.errors import DosageRangeError, NotFoundError, StoreError
from dosage_api.schemas import DosageCalculationInput, DosageCalculationResult
from dosage_api.services import dose_rules

log = logging.getLogger("dosage")


def record_calculation(db: Session, patient_id: int, anesthetic_id: int,
                       concentration_mg_per_ml: float, max_safe_dose_mg: float,
                       max_safe_volume_ml: float) -> DosageCalculation:
    """
    Append one calculation to the history and return it with its
    assigned id and timestamp.
    """
    record = DosageCalculation(
        patient_id=patient_id,
        anesthetic_id=anesthetic_id,
        concentration_mg_per_ml=concentration_mg_per_ml,
        max_safe_dose_mg=max_safe_dose_mg,
        max_safe_volume_ml=max_safe_volume_ml,
    )
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Failed to save dosage calculation: %s", e)
        raise StoreError(f"Failed to save dosage calculation: {e}") from e
    return record


def calculate_dosage(db: Session, payload: DosageCalculationInput) -> DosageCalculationResult:
    """
    Compute the maximum safe dose and volume for a patient/anesthetic pair
    at the supplied concentration, and record it.

    Raises NotFoundError if either id does not resolve and DosageRangeError if
    the dose or volume overflows; nothing is written then.
    """
    try:
        patient = db.get(Patient, payload.patient_id)
        anesthetic = db.get(Anesthetic, payload.anesthetic_id) if patient is not None else None
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to load dosage inputs: {e}") from e

    if patient is None:
        log.warning("Dosage calculation for unknown patient %s", payload.patient_id)
        raise NotFoundError("patient", payload.patient_id)
    if anesthetic is None:
        log.warning("Dosage calculation for unknown anesthetic %s", payload.anesthetic_id)
        raise NotFoundError("anesthetic", payload.anesthetic_id)

    dose = dose_rules.max_safe_dose_mg(patient.weight_kg, anesthetic.max_dose_mg_per_kg)
    volume = dose_rules.max_safe_volume_ml(dose, payload.concentration_mg_per_ml)
    if not (math.isfinite(dose) and math.isfinite(volume)):
        log.warning("Dosage out of range for patient %s / anesthetic %s at %s mg/mL",
                    patient.id, anesthetic.id, payload.concentration_mg_per_ml)
        raise DosageRangeError(
            f"Calculated dose {dose} mg / volume {volume} mL is out of range")

    record = record_calculation(
        db,
        patient_id=patient.id,
        anesthetic_id=anesthetic.id,
        concentration_mg_per_ml=payload.concentration_mg_per_ml,
        max_safe_dose_mg=dose,
        max_safe_volume_ml=volume,
    )
    log.info("Calculation %s: %s / %s -> %s mg, %s mL",
             record.id, patient.id, anesthetic.name, dose, volume)

    return DosageCalculationResult(
        patient_name=patient.name,
        patient_weight_kg=patient.weight_kg,
        anesthetic_name=anesthetic.name,
        concentration_mg_per_ml=payload.concentration_mg_per_ml,
        max_safe_dose_mg=dose,
        max_safe_volume_ml=volume,
        calculation_id=record.id,
        calculated_at=record.calculated_at,
    )


def get_dosage_history(db: Session, patient_id: Optional[int] = None) -> List[DosageCalculation]:
    """Most recent first; equal timestamps fall back to id descending."""
    try:
        q = db.query(DosageCalculation)
        if patient_id is not None:
            q = q.filter(DosageCalculation.patient_id == patient_id)
        return q.order_by(DosageCalculation.calculated_at.desc(), DosageCalculation.id.desc()).all()
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to load dosage history: {e}") from e
