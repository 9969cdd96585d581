import os
import tempfile

# Settings are read at import time: force the local backend before importing the app
os.environ["STORAGE_BACKEND"] = "local"
os.environ["DATABASE_URL"] = ""
os.environ["SEED_DEFAULT_DATA"] = "false"
os.environ["LOCAL_STORE_PATH"] = os.path.join(tempfile.mkdtemp(prefix="vocab-trainer-"), "store.json")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from vocab_trainer.core.config import settings
from vocab_trainer.core.database import init_db
from vocab_trainer.main import app
from vocab_trainer.models.user import User
from vocab_trainer.schemas.records import ROLE_ADMIN, ROLE_STUDENT
from vocab_trainer.services.local_repository import LocalStudyRepository
from vocab_trainer.services.repository import get_repository
from vocab_trainer.services.sql_repository import SqlStudyRepository

ADMIN_PASSWORD = "admin-secret"
STUDENT_PASSWORD = "student-secret"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_repository(engine):
    with Session(engine) as session:
        yield SqlStudyRepository(session)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "store.json"


@pytest.fixture
def local_repository(store_path):
    with LocalStudyRepository.open(store_path) as repository:
        yield repository


@pytest.fixture(params=["sql", "local"])
def repository(request):
    """Runs a test once against each backend."""
    return request.getfixturevalue(f"{request.param}_repository")


def add_admin(repository, email="admin@example.com"):
    user = repository.add_user(
        name="Admin",
        email=email,
        password_hash=User.hash_password(ADMIN_PASSWORD),
        role=ROLE_ADMIN,
    )
    repository.commit()
    return user


def add_student(repository, name="Student", email="student@example.com"):
    user = repository.add_user(
        name=name,
        email=email,
        password_hash=User.hash_password(STUDENT_PASSWORD),
        role=ROLE_STUDENT,
    )
    repository.commit()
    return user


@pytest.fixture
def local_client(store_path, monkeypatch):
    """API client on a fresh local JSON store."""
    monkeypatch.setattr(settings, "local_store_path", str(store_path))
    monkeypatch.setattr(settings, "seed_default_data", False)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def sql_client(engine, monkeypatch):
    """API client on an in-memory SQLite database."""
    monkeypatch.setattr(settings, "seed_default_data", False)

    def override_repository():
        with Session(engine) as session:
            yield SqlStudyRepository(session)

    app.dependency_overrides[get_repository] = override_repository
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_repository, None)


@pytest.fixture(params=["sql", "local"])
def client(request):
    """Runs an API test once against each backend."""
    return request.getfixturevalue(f"{request.param}_client")
