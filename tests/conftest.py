"""Shared fixtures: an in-memory store and an API client bound to it."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dosage_api.db import Anesthetic, Base, Patient, get_db
from dosage_api.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_patient(db):
    def _make(name="Test Patient", weight_kg=70.0, age_years=30):
        patient = Patient(name=name, weight_kg=weight_kg, age_years=age_years)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient
    return _make


@pytest.fixture
def make_anesthetic(db):
    def _make(name="Lidocaine", max_dose_mg_per_kg=4.5, common_concentrations=(10, 20)):
        anesthetic = Anesthetic(
            name=name,
            max_dose_mg_per_kg=max_dose_mg_per_kg,
            common_concentrations=list(common_concentrations),
        )
        db.add(anesthetic)
        db.commit()
        db.refresh(anesthetic)
        return anesthetic
    return _make
