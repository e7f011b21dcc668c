# dosage_api/services/dose_rules.py
from dosage_api.schemas import AnestheticCreate

# Reference catalog for local infiltration. Passed explicitly to seeding.
DEFAULT_ANESTHETICS = [
    AnestheticCreate(name="Lidocaine", max_dose_mg_per_kg=4.5, common_concentrations=[10, 20]),
    AnestheticCreate(name="Lidocaine with Epinephrine", max_dose_mg_per_kg=7.0, common_concentrations=[10, 20]),
    AnestheticCreate(name="Bupivacaine", max_dose_mg_per_kg=2.0, common_concentrations=[2.5, 5.0]),
    AnestheticCreate(name="Procaine", max_dose_mg_per_kg=10.0, common_concentrations=[10, 20]),
]


def max_safe_dose_mg(weight_kg: float, max_dose_mg_per_kg: float) -> float:
    """Dose ceiling in mg. No rounding; display layers round."""
    return weight_kg * max_dose_mg_per_kg


def max_safe_volume_ml(dose_mg: float, concentration_mg_per_ml: float) -> float:
    """Injectable volume in mL that delivers `dose_mg` at the given strength."""
    return dose_mg / concentration_mg_per_ml
