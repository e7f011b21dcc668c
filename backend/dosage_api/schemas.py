# backend/dosage_api/schemas.py
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

# Strictly positive and finite; JSON bodies may carry Infinity or NaN.
PositiveFinite = Annotated[float, Field(gt=0, allow_inf_nan=False)]


class PatientCreate(BaseModel):
    name: str = Field(..., min_length=1)
    weight_kg: float = Field(..., gt=0, le=200, allow_inf_nan=False)
    age_years: Optional[int] = Field(None, ge=1, le=120)


class Patient(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    weight_kg: float
    age_years: Optional[int] = None
    created_at: datetime


class AnestheticCreate(BaseModel):
    name: str = Field(..., min_length=1)
    max_dose_mg_per_kg: PositiveFinite
    common_concentrations: List[PositiveFinite] = Field(..., min_length=1)


class Anesthetic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    max_dose_mg_per_kg: float
    common_concentrations: List[float]
    created_at: datetime


class DosageCalculationInput(BaseModel):
    patient_id: PositiveInt
    anesthetic_id: PositiveInt
    concentration_mg_per_ml: PositiveFinite


class DosageCalculation(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    anesthetic_id: int
    concentration_mg_per_ml: float
    max_safe_dose_mg: float
    max_safe_volume_ml: float
    calculated_at: datetime


class DosageCalculationResult(BaseModel):
    patient_name: str
    patient_weight_kg: float
    anesthetic_name: str
    concentration_mg_per_ml: float
    max_safe_dose_mg: float
    max_safe_volume_ml: float
    calculation_id: int
    calculated_at: datetime


class HealthStatus(BaseModel):
    status: str
    timestamp: datetime
