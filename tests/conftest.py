import pytest
from fastapi.testclient import TestClient

from crudapps.doctor_app import seed as doctor_seed
from crudapps.doctor_app import services as doctor_services
from crudapps.doctor_app.api_main import app as doctor_app
from crudapps.doctor_app.db import database as doctor_database
from crudapps.fruit_app import seed as fruit_seed
from crudapps.fruit_app import services as fruit_services
from crudapps.fruit_app.api_main import app as fruit_app
from crudapps.fruit_app.db import database as fruit_database


@pytest.fixture
def doctor_db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'doctor_app.sqlite'}"


@pytest.fixture
def fruit_db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'fruit_app.sqlite'}"


@pytest.fixture
def doctor_db(doctor_db_url):
    doctor_database.configure(doctor_db_url)
    doctor_services.init_db()
    doctor_seed.seed_base()
    yield doctor_database
    doctor_database.engine.dispose()


@pytest.fixture
def fruit_db(fruit_db_url):
    fruit_database.configure(fruit_db_url)
    fruit_services.init_db()
    fruit_seed.seed_base()
    yield fruit_database
    fruit_database.engine.dispose()


@pytest.fixture
def doctor_client(doctor_db):
    # no `with`: startup hooks (default DB + seed) stay off
    return TestClient(doctor_app)


@pytest.fixture
def fruit_client(fruit_db):
    return TestClient(fruit_app)
