from pathlib import Path
from typing import Any, Dict, List

import logging

import yaml
from sqlmodel import Session, select

from apexgrid.db.models.users import User
from apexgrid.db.models.teams import Team
from apexgrid.db.models.cars import Car
from apexgrid.db.models.drivers import Driver
from apexgrid.db.repositories.cars import CarRepository
from apexgrid.db.repositories.drivers import DriverRepository
from apexgrid.db.repositories.stats import CarStatsRepository, DriverStatsRepository
from apexgrid.db.repositories.teams import TeamRepository
from apexgrid.db.repositories.users import UserRepository
from apexgrid.features.cars.services import CarService
from apexgrid.features.drivers.services import DriverService
from apexgrid.features.stats.services import StatsService
from apexgrid.features.teams.services import TeamService
from apexgrid.security.password import hash_password

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = Path(__file__).with_name("seed_data.yaml")


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Seed YAML must contain a root mapping.")
    return data


def _has_rows(session: Session, model) -> bool:
    return session.exec(select(model.id).limit(1)).first() is not None


# -----------------------------
# Sections
# -----------------------------
def seed_users(session: Session, data: Dict[str, Any]) -> None:
    if _has_rows(session, User):
        logger.info("Users already present, skipping.")
        return
    users: List[Dict[str, Any]] = data.get("users", [])
    repo = UserRepository(session)
    for u in users:
        repo.create(
            commit=False,
            name=u["name"],
            email=u["email"],
            password_hash=hash_password(u["password"]),
        )
    session.commit()
    logger.info("%s users inserted.", len(users))


def seed_teams(session: Session, data: Dict[str, Any]) -> Dict[str, int]:
    """Retourne team_key -> id (clé YAML, pas de colonne key en DB)."""
    repo = TeamRepository(session)
    teams_yaml: List[Dict[str, Any]] = data.get("teams", [])
    if _has_rows(session, Team):
        logger.info("Teams already present, skipping.")
        by_name = {t.name: t.id for t in repo.list_by_name()}
        return {t["key"]: by_name[t["name"]] for t in teams_yaml if t["name"] in by_name}

    svc = TeamService(repo)
    ids = {
        t["key"]: svc.create_team(t["name"], base_country=t.get("base_country"), principal=t.get("principal"))
        for t in teams_yaml
    }
    logger.info("%s teams inserted.", len(ids))
    return ids


def seed_cars(session: Session, data: Dict[str, Any], team_ids: Dict[str, int]) -> None:
    if _has_rows(session, Car):
        logger.info("Cars already present, skipping.")
        return
    svc = CarService(CarRepository(session), TeamRepository(session), CarStatsRepository(session))
    stats = _stats_service(session)
    cars: List[Dict[str, Any]] = data.get("cars", [])
    for c in cars:
        car_id = svc.create_car(
            team_ids[c["team_key"]],
            c["model"],
            manufacturer=c.get("manufacturer"),
            season_year=c["season_year"],
            engine=c.get("engine"),
            horsepower=c.get("horsepower"),
            image_url=c.get("image_url"),
        )
        if c.get("stats"):
            stats.upsert_car_stats(car_id, **c["stats"])
    logger.info("%s cars inserted.", len(cars))


def seed_drivers(session: Session, data: Dict[str, Any], team_ids: Dict[str, int]) -> None:
    if _has_rows(session, Driver):
        logger.info("Drivers already present, skipping.")
        return
    svc = DriverService(DriverRepository(session), TeamRepository(session), DriverStatsRepository(session))
    stats = _stats_service(session)
    drivers: List[Dict[str, Any]] = data.get("drivers", [])
    for d in drivers:
        driver_id = svc.create_driver(
            team_ids[d["team_key"]],
            d["first_name"],
            d["last_name"],
            nationality=d.get("nationality"),
            date_of_birth=d.get("date_of_birth"),
            driver_number=d.get("driver_number"),
        )
        if d.get("stats"):
            stats.upsert_driver_stats(driver_id, **d["stats"])
    logger.info("%s drivers inserted.", len(drivers))


def _stats_service(session: Session) -> StatsService:
    return StatsService(
        car_repo=CarRepository(session),
        driver_repo=DriverRepository(session),
        car_stats_repo=CarStatsRepository(session),
        driver_stats_repo=DriverStatsRepository(session),
    )


def seed_all(*, session: Session, seed_path: str | Path = DEFAULT_SEED_PATH) -> None:
    data = load_seed_yaml(seed_path)
    seed_users(session, data)
    team_ids = seed_teams(session, data)
    seed_cars(session, data, team_ids)
    seed_drivers(session, data, team_ids)
