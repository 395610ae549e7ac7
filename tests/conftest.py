import os
import tempfile

# app.db reads DATABASE_URL at import time
_DB_DIR = tempfile.mkdtemp(prefix="incentive-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["MANAGER_API_KEY"] = "test-manager-key"

import pytest
from fastapi.testclient import TestClient

from app.db import Base, SessionLocal, engine
from app.main import app
from app.models.event_definition import EventDefinition
from app.models.reward import Reward
from app.schemas.employee import EmployeeCreate
from app.services.employee_service import create_employee


MANAGER_HEADERS = {"X-Manager-Key": "test-manager-key"}


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def manager_headers():
    return dict(MANAGER_HEADERS)


@pytest.fixture
def make_employee(db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "username": f"user{counter['n']}",
            "full_name": f"Employee {counter['n']}",
            "password": "secret",
        }
        data.update(overrides)
        return create_employee(db, EmployeeCreate(**data))

    return _make


@pytest.fixture
def make_definition(db):
    def _make(name="Upsell", points=10, event_type="positive", is_enabled=True):
        definition = EventDefinition(name=name, points=points, event_type=event_type, is_enabled=is_enabled)
        db.add(definition)
        db.commit()
        db.refresh(definition)
        return definition

    return _make


@pytest.fixture
def make_reward(db):
    def _make(name="Coffee voucher", points_cost=50, stock=None, is_active=True):
        reward = Reward(name=name, points_cost=points_cost, stock=stock, is_active=is_active, category="general")
        db.add(reward)
        db.commit()
        db.refresh(reward)
        return reward

    return _make
