"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_team_service() : crée un TeamService à partir d'une session DB.

get_request_context() : résout la session navigateur (cookie) et l'utilisateur courant, une fois par requête.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from typing import Optional

from fastapi import Depends, Request
from sqlmodel import Session

from apexgrid.db.session import get_session
from apexgrid.core.config import settings, session_token_settings
from apexgrid.core.errors import StoreUnavailableError

from apexgrid.db.repositories.users import UserRepository
from apexgrid.db.repositories.web_sessions import WebSessionRepository
from apexgrid.features.authentication.services import AuthService, RequestContext

from apexgrid.db.repositories.teams import TeamRepository
from apexgrid.db.repositories.cars import CarRepository
from apexgrid.db.repositories.drivers import DriverRepository
from apexgrid.db.repositories.stats import CarStatsRepository, DriverStatsRepository

from apexgrid.features.teams.services import TeamService
from apexgrid.features.cars.services import CarService
from apexgrid.features.drivers.services import DriverService
from apexgrid.features.stats.services import StatsService
from apexgrid.features.dashboard.services import DashboardService


# -----------------------------
# Repositories
# -----------------------------
def get_team_repository(session: Session = Depends(get_session)) -> TeamRepository:
    return TeamRepository(session)

def get_car_repository(session: Session = Depends(get_session)) -> CarRepository:
    return CarRepository(session)

def get_driver_repository(session: Session = Depends(get_session)) -> DriverRepository:
    return DriverRepository(session)

def get_car_stats_repository(session: Session = Depends(get_session)) -> CarStatsRepository:
    return CarStatsRepository(session)

def get_driver_stats_repository(session: Session = Depends(get_session)) -> DriverStatsRepository:
    return DriverStatsRepository(session)


# -----------------------------
# Auth
# -----------------------------
def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(
        user_repo=UserRepository(session),
        session_repo=WebSessionRepository(session),
        token_settings=session_token_settings,
    )


def get_request_context(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> RequestContext:
    """
    Résout le cookie de session -> RequestContext (session + utilisateur).
    Si la base n'est pas prête, on renvoie un contexte non persisté :
    la page s'affiche quand même avec le message d'erreur.
    """
    token: Optional[str] = request.cookies.get(settings.SESSION_COOKIE_NAME)
    try:
        ctx = auth.open_session(token)
        ctx.user = auth.current_user(ctx)
    except StoreUnavailableError as exc:
        ctx = auth.open_detached(exc)
    return ctx


# -----------------------------
# Domain services
# -----------------------------
def get_team_service(
    team_repo: TeamRepository = Depends(get_team_repository),
) -> TeamService:
    return TeamService(team_repo)

def get_car_service(
    car_repo: CarRepository = Depends(get_car_repository),
    team_repo: TeamRepository = Depends(get_team_repository),
    stats_repo: CarStatsRepository = Depends(get_car_stats_repository),
) -> CarService:
    return CarService(car_repo, team_repo, stats_repo)

def get_driver_service(
    driver_repo: DriverRepository = Depends(get_driver_repository),
    team_repo: TeamRepository = Depends(get_team_repository),
    stats_repo: DriverStatsRepository = Depends(get_driver_stats_repository),
) -> DriverService:
    return DriverService(driver_repo, team_repo, stats_repo)

def get_stats_service(
    car_repo: CarRepository = Depends(get_car_repository),
    driver_repo: DriverRepository = Depends(get_driver_repository),
    car_stats_repo: CarStatsRepository = Depends(get_car_stats_repository),
    driver_stats_repo: DriverStatsRepository = Depends(get_driver_stats_repository),
) -> StatsService:
    return StatsService(
        car_repo=car_repo,
        driver_repo=driver_repo,
        car_stats_repo=car_stats_repo,
        driver_stats_repo=driver_stats_repo,
    )

def get_dashboard_service(
    team_repo: TeamRepository = Depends(get_team_repository),
    car_repo: CarRepository = Depends(get_car_repository),
    driver_repo: DriverRepository = Depends(get_driver_repository),
) -> DashboardService:
    return DashboardService(team_repo=team_repo, car_repo=car_repo, driver_repo=driver_repo)
