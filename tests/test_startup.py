import pytest
from fastapi.testclient import TestClient

from crudapps.doctor_app import api_main as doctor_api
from crudapps.doctor_app import services as doctor_services
from crudapps.doctor_app.db import database as doctor_database
from crudapps.fruit_app import api_main as fruit_api
from crudapps.fruit_app import services as fruit_services
from crudapps.fruit_app.db import database as fruit_database


@pytest.fixture
def doctor_fresh_db(doctor_db_url, monkeypatch):
    monkeypatch.setattr(doctor_api, "SEED_ON_STARTUP", True)
    doctor_database.configure(doctor_db_url)
    yield doctor_database
    doctor_database.engine.dispose()


@pytest.fixture
def fruit_fresh_db(fruit_db_url, monkeypatch):
    monkeypatch.setattr(fruit_api, "SEED_ON_STARTUP", True)
    fruit_database.configure(fruit_db_url)
    yield fruit_database
    fruit_database.engine.dispose()


def test_doctor_startup_creates_and_seeds(doctor_fresh_db):
    with TestClient(doctor_api.app) as client:
        r = client.get("/doctors")
    assert r.status_code == 200
    assert [d["name"] for d in r.json()["doctors"]] == ["John Doe", "Schmitty Footman"]


def test_doctor_startup_with_existing_user_rows(doctor_fresh_db):
    doctor_services.init_db()
    doctor_services.create_patient("Patient 1")
    with TestClient(doctor_api.app) as client:
        r = client.get("/patients")
    assert r.status_code == 200
    # the existing "Patient 1" stands in for the fixture row
    assert [p["name"] for p in r.json()["patients"]] == ["Patient 1", "Patient 2"]


def test_fruit_startup_creates_and_seeds(fruit_fresh_db):
    with TestClient(fruit_api.app) as client:
        r = client.get("/fruits")
    assert r.status_code == 200
    assert "banana" in r.text
    assert len(fruit_services.list_seasons()) == 4


def test_fruit_startup_with_existing_user_rows(fruit_fresh_db):
    fruit_services.init_db()
    fruit_services.create_fruit(fruit_services.parse_fruit_form({"name": "apple", "color": "green"}))
    with TestClient(fruit_api.app) as client:
        r = client.get("/fruits")
    assert r.status_code == 200
    assert [f["name"] for f in fruit_services.list_fruits()] == ["apple", "apple", "pear", "banana"]
