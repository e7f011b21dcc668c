# backend/dosage_api/main.py
import datetime
import logging
import os
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from dosage_api.db import get_db, init_db
from dosage_api.errors import DosageRangeError, NotFoundError, StoreError
from dosage_api.schemas import (
    Anesthetic,
    AnestheticCreate,
    DosageCalculation,
    DosageCalculationInput,
    DosageCalculationResult,
    HealthStatus,
    Patient,
    PatientCreate,
)
from dosage_api.services import anesthetics, dosage, patients
from dosage_api.services.dose_rules import DEFAULT_ANESTHETICS

log = logging.getLogger("uvicorn.error")

app = FastAPI(title="Anesthetic Dosage API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("DOSAGE_CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup():
    init_db()


def _store_failure(exc: StoreError) -> HTTPException:
    log.error("Store failure: %s", exc)
    return HTTPException(status_code=500, detail="Storage failure")


@app.get("/health", response_model=HealthStatus)
def healthcheck():
    return HealthStatus(status="ok", timestamp=datetime.datetime.utcnow())


@app.post("/patients", response_model=Patient, status_code=201)
def route_create_patient(payload: PatientCreate, db: Session = Depends(get_db)):
    try:
        return patients.create_patient(db, payload)
    except StoreError as e:
        raise _store_failure(e) from e


@app.get("/patients", response_model=List[Patient])
def route_list_patients(db: Session = Depends(get_db)):
    try:
        return patients.list_patients(db)
    except StoreError as e:
        raise _store_failure(e) from e


@app.post("/anesthetics", response_model=Anesthetic, status_code=201)
def route_create_anesthetic(payload: AnestheticCreate, db: Session = Depends(get_db)):
    try:
        return anesthetics.create_anesthetic(db, payload)
    except StoreError as e:
        raise _store_failure(e) from e


@app.get("/anesthetics", response_model=List[Anesthetic])
def route_list_anesthetics(db: Session = Depends(get_db)):
    try:
        return anesthetics.list_anesthetics(db)
    except StoreError as e:
        raise _store_failure(e) from e


@app.post("/anesthetics/seed", response_model=List[Anesthetic])
def route_seed_anesthetics(db: Session = Depends(get_db)):
    """Load the reference catalog into an empty store; no-op otherwise."""
    try:
        return anesthetics.seed_default_anesthetics(db, DEFAULT_ANESTHETICS)
    except StoreError as e:
        raise _store_failure(e) from e


@app.post("/dosage/calculate", response_model=DosageCalculationResult)
def route_calculate_dosage(payload: DosageCalculationInput, db: Session = Depends(get_db)):
    try:
        return dosage.calculate_dosage(db, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except DosageRangeError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except StoreError as e:
        raise _store_failure(e) from e


@app.get("/dosage/history", response_model=List[DosageCalculation])
def route_dosage_history(patient_id: Optional[int] = Query(None, gt=0), db: Session = Depends(get_db)):
    """
    Recorded calculations, most recent first. Pass patient_id to restrict
    the list to one patient.
    """
    try:
        return dosage.get_dosage_history(db, patient_id)
    except StoreError as e:
        raise _store_failure(e) from e
