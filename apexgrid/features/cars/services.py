"""
➡️ But : Logique métier du catalogue de voitures.

CarService : valide le formulaire, crée la voiture ET sa ligne de stats vide dans
la même transaction, supprime la voiture et ses stats ensemble.
"""

import logging
from datetime import date
from typing import Any, Callable, List, Optional

from sqlalchemy.exc import IntegrityError

from apexgrid.core.errors import ValidationError
from apexgrid.db.repositories.cars import CarRepository
from apexgrid.db.repositories.stats import CarStatsRepository
from apexgrid.db.repositories.teams import TeamRepository
from apexgrid.features.cars.schemas import CarListItem
from apexgrid.utils.forms import as_int, clean, parse_non_negative

logger = logging.getLogger(__name__)

FIRST_SEASON = 1950


class CarService:
    def __init__(
        self,
        repo: CarRepository,
        team_repo: TeamRepository,
        stats_repo: CarStatsRepository,
        today_fn: Callable[[], date] = date.today,
    ):
        self.repo = repo
        self.team_repo = team_repo
        self.stats_repo = stats_repo
        self.today_fn = today_fn

    def list_cars(self) -> List[CarListItem]:
        with self.repo.guard():
            return self.repo.list_catalogue()

    def create_car(
        self,
        team_id: Any,
        model: Any,
        manufacturer: Any = None,
        season_year: Any = None,
        engine: Any = None,
        horsepower: Any = None,
        image_url: Any = None,
    ) -> int:
        team_id = as_int(team_id)
        model = clean(model) or ""
        season_year = as_int(season_year)
        horsepower = clean(horsepower) if isinstance(horsepower, str) else horsepower
        errors: List[str] = []

        with self.repo.guard():
            if team_id <= 0 or self.team_repo.get(team_id) is None:
                errors.append("Please select a team.")
            if len(model) < 2:
                errors.append("Car model must be at least 2 characters.")
            if not FIRST_SEASON <= season_year <= self.today_fn().year + 1:
                errors.append("Please enter a realistic season year.")
            hp: Optional[int] = None
            if horsepower is not None:
                hp = parse_non_negative(horsepower)
                if hp is None:
                    errors.append("Horsepower must be a positive number.")
            if errors:
                raise ValidationError(errors)

            try:
                car = self.repo.create(
                    commit=False,
                    team_id=team_id,
                    model=model,
                    manufacturer=clean(manufacturer),
                    season_year=season_year,
                    engine=clean(engine),
                    horsepower=hp,
                    image_url=clean(image_url),
                )
                # ligne de stats vide, dans la même transaction
                self.stats_repo.create(commit=False, car_id=car.id)
                self.repo.commit()
            except IntegrityError as exc:
                self.repo.rollback()
                raise ValidationError(["Please select a team."]) from exc

        logger.info("Car created: id=%s model=%r season=%s team=%s", car.id, model, season_year, team_id)
        return car.id

    def delete_car(self, car_id: Optional[int]) -> bool:
        if not car_id or car_id <= 0:
            return False
        with self.repo.guard():
            car = self.repo.get(car_id)
            if car is None:
                return False
            self.stats_repo.delete_for_car(car_id, commit=False)
            self.repo.delete(car, commit=False)
            self.repo.commit()
        logger.info("Car deleted: id=%s", car_id)
        return True
