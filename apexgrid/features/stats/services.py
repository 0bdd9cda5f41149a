"""
➡️ But : Mise à jour des statistiques (upsert) et tableaux de classement.

Upsert = lecture + écriture dans une seule transaction, clé = car_id / driver_id.
Le clamp à >= 0 est fait ici (et non en base) pour rester indépendant du moteur SQL.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError

from apexgrid.core.errors import ValidationError
from apexgrid.db.models.base import utcnow
from apexgrid.db.repositories.base import BaseRepository
from apexgrid.db.repositories.cars import CarRepository
from apexgrid.db.repositories.drivers import DriverRepository
from apexgrid.db.repositories.stats import CarStatsRepository, DriverStatsRepository
from apexgrid.features.stats.schemas import CarStatsRow, DriverStatsRow
from apexgrid.utils.forms import as_int, clamp_non_negative

logger = logging.getLogger(__name__)


class StatsService:
    def __init__(
        self,
        *,
        car_repo: CarRepository,
        driver_repo: DriverRepository,
        car_stats_repo: CarStatsRepository,
        driver_stats_repo: DriverStatsRepository,
    ):
        self.car_repo = car_repo
        self.driver_repo = driver_repo
        self.car_stats_repo = car_stats_repo
        self.driver_stats_repo = driver_stats_repo

    # ---------- Listes ----------

    def list_driver_stats(self) -> List[DriverStatsRow]:
        with self.driver_stats_repo.guard():
            return self.driver_stats_repo.list_rows()

    def list_car_stats(self) -> List[CarStatsRow]:
        with self.car_stats_repo.guard():
            return self.car_stats_repo.list_rows()

    # ---------- Upserts ----------

    def upsert_driver_stats(
        self,
        driver_id: Any,
        races: Any = 0,
        wins: Any = 0,
        podiums: Any = 0,
        poles: Any = 0,
        points: Any = 0,
        championships: Any = 0,
    ) -> None:
        driver_id = as_int(driver_id)
        values = self._clamped(
            races=races,
            wins=wins,
            podiums=podiums,
            poles=poles,
            points=points,
            championships=championships,
        )
        with self.driver_stats_repo.guard():
            if driver_id <= 0 or self.driver_repo.get(driver_id) is None:
                raise ValidationError(["Invalid driver selection."])
            existing = self.driver_stats_repo.get_by_driver(driver_id)
            self._write(self.driver_stats_repo, existing, driver_id=driver_id, **values)
        logger.info("Driver stats updated: driver=%s %s", driver_id, values)

    def upsert_car_stats(
        self,
        car_id: Any,
        races: Any = 0,
        wins: Any = 0,
        poles: Any = 0,
        fastest_laps: Any = 0,
        points: Any = 0,
    ) -> None:
        car_id = as_int(car_id)
        values = self._clamped(
            races=races,
            wins=wins,
            poles=poles,
            fastest_laps=fastest_laps,
            points=points,
        )
        with self.car_stats_repo.guard():
            if car_id <= 0 or self.car_repo.get(car_id) is None:
                raise ValidationError(["Invalid car selection."])
            existing = self.car_stats_repo.get_by_car(car_id)
            self._write(self.car_stats_repo, existing, car_id=car_id, **values)
        logger.info("Car stats updated: car=%s %s", car_id, values)

    # ---------- Helpers ----------

    @staticmethod
    def _clamped(**fields: Any) -> Dict[str, int]:
        return {name: clamp_non_negative(value) for name, value in fields.items()}

    @staticmethod
    def _write(repo: BaseRepository, existing, **values: Any) -> None:
        """Écrase la ligne existante ou en crée une ; une seule transaction."""
        try:
            if existing is not None:
                repo.update(existing, commit=False, updated_at=utcnow(), **values)
            else:
                repo.create(commit=False, **values)
            repo.commit()
        except IntegrityError as exc:
            # la voiture / le pilote a disparu entre la lecture et l'écriture
            repo.rollback()
            raise ValidationError(["Could not update stats."]) from exc
