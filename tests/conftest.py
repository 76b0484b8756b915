import os
import time
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.config import settings
from app.infrastructure.db.session import Base, get_db
from app.main import app
from tests.helpers.factories import create_school, create_user


class FakeRedisClient:
    """In-memory stand-in for the handful of Redis commands the service uses."""

    def __init__(self) -> None:
        self.values: dict[str, int] = {}
        self.expires_at: dict[str, float] = {}

    def _purge(self, key: str) -> None:
        deadline = self.expires_at.get(key)
        if deadline is not None and deadline <= time.monotonic():
            self.values.pop(key, None)
            self.expires_at.pop(key, None)

    def ping(self) -> bool:
        return True

    def incr(self, key: str) -> int:
        self._purge(key)
        self.values[key] = self.values.get(key, 0) + 1
        return self.values[key]

    def expire(self, key: str, seconds: int) -> bool:
        if key not in self.values:
            return False
        self.expires_at[key] = time.monotonic() + seconds
        return True

    def ttl(self, key: str) -> int:
        self._purge(key)
        if key not in self.values:
            return -2
        deadline = self.expires_at.get(key)
        if deadline is None:
            return -1
        return max(int(deadline - time.monotonic()), 0)


@pytest.fixture(scope="session")
def database_url(tmp_path_factory):
    if os.environ.get("TEST_DATABASE") == "postgres":
        from testcontainers.postgres import PostgresContainer

        with PostgresContainer("postgres:16-alpine") as postgres:
            yield postgres.get_connection_url().replace("postgresql://", "postgresql+psycopg2://", 1)
        return
    yield f"sqlite:///{tmp_path_factory.mktemp('db') / 'test.db'}"


def run_migrations(database_url: str) -> None:
    os.environ["DATABASE_URL"] = database_url
    settings.database_url = database_url
    alembic_config = Config(str(Path(__file__).resolve().parents[1] / "alembic.ini"))
    alembic_config.attributes["configure_logger"] = False
    command.upgrade(alembic_config, "head")


@pytest.fixture(scope="session")
def engine(database_url):
    run_migrations(database_url=database_url)
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    engine = create_engine(database_url, future=True, connect_args=connect_args)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(autouse=True)
def clean_database(engine):
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture
def fake_redis(monkeypatch):
    client = FakeRedisClient()
    monkeypatch.setattr("app.application.services.rate_limit_service.get_redis_client", lambda: client)
    monkeypatch.setattr("app.interfaces.api.v1.routes.ping.get_redis_client", lambda: client)
    return client


@pytest.fixture
def db_session(engine, fake_redis):
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_users(db_session):
    return {
        "kash": create_user(db_session, username="kash", email="kash@gmail.com", password="1234kash"),
        "john": create_user(db_session, username="john", email="john@gmail.com", password="1234john"),
    }


@pytest.fixture
def seeded_schools(db_session):
    return {
        "holystar": create_school(
            db_session,
            owner_name="Ali Koffi",
            school_name="HolyStar Int.School",
            school_hotline="0542233516",
            location="Sapeiman",
        ),
        "bright_future": create_school(
            db_session,
            owner_name="Ama Mensah",
            school_name="Bright Future Academy",
            school_hotline="0201234567",
            location="Kumasi",
            email="info@brightfuture.com",
        ),
    }
