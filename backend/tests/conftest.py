"""Test fixtures: in-memory SQLite database, fake object storage, API client."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from scifanor.auth import create_access_token, hash_password
from scifanor.backend import CatalogBackend
from scifanor.database import get_db, init_db
from scifanor.errors import TransientIOError
from scifanor.main import app
from scifanor.models import Plant, PlantCollaborator, Profile, User
from scifanor.routers.auth import limiter
from scifanor.storage import get_storage

PASSWORD = "rahasia-123"
BASE_TIME = datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)


class FakeStorage:
    """Records uploads in memory instead of talking to S3."""

    def __init__(self, fail: bool = False):
        self.objects: Dict[str, bytes] = {}
        self.fail = fail

    def upload_bytes(self, bucket: str, key: str, payload: bytes, content_type: str) -> str:
        if self.fail:
            raise TransientIOError(f"Upload to {bucket}/{key} failed")
        self.objects[f"{bucket}/{key}"] = payload
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        return f"https://media.test/plant-images/{key}"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine) -> Session:
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def client(engine, storage):
    """API client wired to the test database and fake storage."""
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        session = factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db: Session, email: str, full_name: str | None = None, is_admin: bool = False,
              with_profile: bool = True) -> User:
    user = User(email=email, password_hash=hash_password(PASSWORD))
    db.add(user)
    db.flush()
    if with_profile:
        db.add(Profile(id=user.id, full_name=full_name, is_admin=is_admin))
    db.commit()
    db.refresh(user)
    return user


def make_plant(db: Session, creator: User | None, nama: str, famili: str | None = None,
               minutes: int = 0, **fields) -> Plant:
    plant = Plant(
        nama_indonesia=nama,
        famili=famili,
        created_by=creator.id if creator else None,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        **fields,
    )
    db.add(plant)
    db.commit()
    db.refresh(plant)
    return plant


def link(db: Session, plant: Plant, user: User) -> PlantCollaborator:
    row = PlantCollaborator(plant_id=plant.id, user_id=user.id)
    db.add(row)
    db.commit()
    return row


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture()
def alice(db) -> User:
    return make_user(db, "alice@scifanor.local", "Alice Siregar")


@pytest.fixture()
def budi(db) -> User:
    return make_user(db, "budi@scifanor.local", "Budi Santoso")


@pytest.fixture()
def admin(db) -> User:
    return make_user(db, "guru@scifanor.local", "Ibu Guru", is_admin=True)


@pytest.fixture()
def backend_for(db, storage):
    """Factory for a backend client acting as the given user (or anonymous)."""
    def _make(user: User | None = None) -> CatalogBackend:
        return CatalogBackend(db, storage=storage, user=user)
    return _make
