"""
➡️ But : Logique métier des pilotes.

DriverService : mêmes règles que les voitures (écurie existante, ligne de stats
créée avec le pilote, supprimée avec lui) + validation stricte de la date de naissance.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError

from apexgrid.core.errors import ValidationError
from apexgrid.db.repositories.drivers import DriverRepository
from apexgrid.db.repositories.stats import DriverStatsRepository
from apexgrid.db.repositories.teams import TeamRepository
from apexgrid.features.drivers.schemas import DriverListItem
from apexgrid.utils.forms import as_int, clean, parse_iso_date, parse_non_negative

logger = logging.getLogger(__name__)


class DriverService:
    def __init__(
        self,
        repo: DriverRepository,
        team_repo: TeamRepository,
        stats_repo: DriverStatsRepository,
    ):
        self.repo = repo
        self.team_repo = team_repo
        self.stats_repo = stats_repo

    def list_drivers(self) -> List[DriverListItem]:
        with self.repo.guard():
            return self.repo.list_with_team()

    def create_driver(
        self,
        team_id: Any,
        first_name: Any,
        last_name: Any,
        nationality: Any = None,
        date_of_birth: Any = None,
        driver_number: Any = None,
    ) -> int:
        team_id = as_int(team_id)
        first_name = clean(first_name) or ""
        last_name = clean(last_name) or ""
        if isinstance(date_of_birth, str):
            date_of_birth = clean(date_of_birth)
        if isinstance(driver_number, str):
            driver_number = clean(driver_number)
        errors: List[str] = []

        with self.repo.guard():
            if team_id <= 0 or self.team_repo.get(team_id) is None:
                errors.append("Please select a team.")
            if len(first_name) < 2:
                errors.append("First name must be at least 2 characters.")
            if len(last_name) < 2:
                errors.append("Last name must be at least 2 characters.")

            number: Optional[int] = None
            if driver_number is not None:
                number = parse_non_negative(driver_number)
                if number is None:
                    errors.append("Driver number must be a positive number.")

            dob = None
            if date_of_birth is not None:
                dob = parse_iso_date(date_of_birth)
                if dob is None:
                    errors.append("Date of birth must be in YYYY-MM-DD format.")

            if errors:
                raise ValidationError(errors)

            try:
                driver = self.repo.create(
                    commit=False,
                    team_id=team_id,
                    first_name=first_name,
                    last_name=last_name,
                    nationality=clean(nationality),
                    date_of_birth=dob,
                    driver_number=number,
                )
                self.stats_repo.create(commit=False, driver_id=driver.id)
                self.repo.commit()
            except IntegrityError as exc:
                self.repo.rollback()
                raise ValidationError(["Please select a team."]) from exc

        logger.info("Driver created: id=%s name=%r team=%s", driver.id, f"{first_name} {last_name}", team_id)
        return driver.id

    def delete_driver(self, driver_id: Optional[int]) -> bool:
        if not driver_id or driver_id <= 0:
            return False
        with self.repo.guard():
            driver = self.repo.get(driver_id)
            if driver is None:
                return False
            self.stats_repo.delete_for_driver(driver_id, commit=False)
            self.repo.delete(driver, commit=False)
            self.repo.commit()
        logger.info("Driver deleted: id=%s", driver_id)
        return True
