# backend/dosage_api/db.py
import os
import datetime

from sqlalchemy import create_engine, Column, Integer, String, Float, JSON, DateTime, ForeignKey
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

DATABASE_URL = os.getenv("DOSAGE_DATABASE_URL", "sqlite:///./anesthetic_dosage.db")
DB_ECHO = os.getenv("DOSAGE_DB_ECHO", "false").lower() == "true"

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args, echo=DB_ECHO)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()

class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    weight_kg = Column(Float, nullable=False)
    age_years = Column(Integer)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)


class Anesthetic(Base):
    __tablename__ = "anesthetics"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    max_dose_mg_per_kg = Column(Float, nullable=False)
    common_concentrations = Column(JSON, nullable=False)  # mg/mL, advisory only
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)


class DosageCalculation(Base):
    __tablename__ = "dosage_calculations"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    anesthetic_id = Column(Integer, ForeignKey("anesthetics.id"), nullable=False)
    concentration_mg_per_ml = Column(Float, nullable=False)
    max_safe_dose_mg = Column(Float, nullable=False)
    max_safe_volume_ml = Column(Float, nullable=False)
    calculated_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False, index=True)

    # lookup only; history rows are never cascaded
    patient = relationship("Patient", viewonly=True)
    anesthetic = relationship("Anesthetic", viewonly=True)


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """Yield one session per request and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
