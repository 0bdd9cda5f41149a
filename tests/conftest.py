"""Shared fixtures: in-memory SQLite with FKs on, one SQLModel session per test."""

import os

# Avant tout import d'apexgrid : les settings sont lus à l'import
os.environ.setdefault("ENV", "test")
os.environ.setdefault("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from apexgrid.core.config import session_token_settings
from apexgrid.db.session import enable_foreign_keys, get_session, init_db
from apexgrid.db.repositories.cars import CarRepository
from apexgrid.db.repositories.drivers import DriverRepository
from apexgrid.db.repositories.stats import CarStatsRepository, DriverStatsRepository
from apexgrid.db.repositories.teams import TeamRepository
from apexgrid.db.repositories.users import UserRepository
from apexgrid.db.repositories.web_sessions import WebSessionRepository
from apexgrid.features.authentication.services import AuthService
from apexgrid.features.cars.services import CarService
from apexgrid.features.dashboard.services import DashboardService
from apexgrid.features.drivers.services import DriverService
from apexgrid.features.stats.services import StatsService
from apexgrid.features.teams.services import TeamService
from apexgrid.main import app


def _memory_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return enable_foreign_keys(engine)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def engine():
    eng = _memory_engine()
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def bare_engine():
    """Engine sans aucune table : simule une base pas encore initialisée."""
    eng = _memory_engine()
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


@pytest.fixture
def team_service(session) -> TeamService:
    return TeamService(TeamRepository(session))


@pytest.fixture
def car_service(session) -> CarService:
    return CarService(CarRepository(session), TeamRepository(session), CarStatsRepository(session))


@pytest.fixture
def driver_service(session) -> DriverService:
    return DriverService(DriverRepository(session), TeamRepository(session), DriverStatsRepository(session))


@pytest.fixture
def stats_service(session) -> StatsService:
    return StatsService(
        car_repo=CarRepository(session),
        driver_repo=DriverRepository(session),
        car_stats_repo=CarStatsRepository(session),
        driver_stats_repo=DriverStatsRepository(session),
    )


@pytest.fixture
def dashboard_service(session) -> DashboardService:
    return DashboardService(
        team_repo=TeamRepository(session),
        car_repo=CarRepository(session),
        driver_repo=DriverRepository(session),
    )


@pytest.fixture
def auth_service(session) -> AuthService:
    return AuthService(
        user_repo=UserRepository(session),
        session_repo=WebSessionRepository(session),
        token_settings=session_token_settings,
    )


@pytest.fixture
def apex_team(team_service) -> int:
    return team_service.create_team("Apex Racing", base_country="United Kingdom", principal="Jordan Hale")


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def _client_for(engine) -> TestClient:
    def _get_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _get_session
    # pas de `with` : l'événement startup viserait la base fichier
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def client(engine):
    yield _client_for(engine)
    app.dependency_overrides.clear()


@pytest.fixture
def bare_client(bare_engine):
    yield _client_for(bare_engine)
    app.dependency_overrides.clear()


@pytest.fixture
def logged_in(client) -> TestClient:
    response = client.post(
        "/register",
        data={
            "name": "Ada Admin",
            "email": "ada@apexgrid.io",
            "password": "secret123",
            "password_confirm": "secret123",
        },
    )
    assert response.status_code == 303
    client.get("/dashboard")  # consomme le flash de bienvenue
    return client
