import sys, pathlib

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from datetime import date

import pytest

from carrental import create_app
from carrental.config import Settings
from carrental.models.requester import Requester
from carrental.models.store import Store
from carrental.utils.constants import Role
from carrental.utils.security import generate_hash, issue_token

TEST_JWT_SECRET = "test-jwt-secret"


@pytest.fixture
def store():
    """A clean in-memory store (roles seeded, nothing else)."""
    return Store(None)


@pytest.fixture
def settings():
    return Settings(
        secret_key="test",
        jwt_secret=TEST_JWT_SECRET,
        data_path=None,
        seed_defaults=False,
        app_env="test",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings, store):
    app = create_app(settings, store=store)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


def make_customer(store, username="mario", role=Role.CUSTOMER, password="secret1", enabled=True):
    """Insert a customer straight into the store and return the record."""
    return store.create_customer({
        "username": username,
        "password_hash": generate_hash(password),
        "first_name": username.capitalize(),
        "last_name": "Rossi",
        "date_of_birth": date(1990, 5, 17),
        "enabled": enabled,
        "role_id": store.find_role_by_name(role)["id"],
    })


def make_car(store, plate="AA-001", brand="Fiat", model="Panda", year=2021, category="Automobile"):
    return store.create_car({
        "license_plate": plate,
        "brand": brand,
        "model": model,
        "year": year,
        "category": category,
    })


def book(store, customer, car, start, end):
    """Insert a rental with no validation, for setting up existing bookings."""
    return store.insert_rental({
        "start_date": date.fromisoformat(start),
        "end_date": date.fromisoformat(end),
        "customer_id": customer["id"],
        "car_id": car["id"],
    })


def as_requester(customer, role=Role.CUSTOMER):
    return Requester(id=customer["id"], username=customer["username"], role=role)


def auth_header(customer, role=Role.CUSTOMER, secret=TEST_JWT_SECRET):
    token = issue_token(customer, role, secret)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(store):
    return make_customer(store, "admin", role=Role.ADMIN, password="admin123")


@pytest.fixture
def admin_headers(admin):
    return auth_header(admin, Role.ADMIN)
