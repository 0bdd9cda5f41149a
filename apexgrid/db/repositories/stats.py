"""
➡️ But : Persistance des tables car_stats / driver_stats.

Clé logique = car_id / driver_id (UNIQUE). Les listes partent des voitures /
pilotes (LEFT JOIN) pour que ceux sans ligne de stats apparaissent à zéro.
"""

from typing import Optional
from sqlalchemy import literal
from sqlmodel import select, func

from apexgrid.db.repositories.base import BaseRepository
from apexgrid.db.models.stats import CarStats, DriverStats
from apexgrid.db.models.cars import Car
from apexgrid.db.models.drivers import Driver
from apexgrid.db.models.teams import Team
from apexgrid.features.stats.schemas import CarStatsRow, DriverStatsRow


def _zero(column, name: str):
    return func.coalesce(column, 0).label(name)


class CarStatsRepository(BaseRepository[CarStats]):
    model = CarStats

    def get_by_car(self, car_id: int) -> Optional[CarStats]:
        return self.session.exec(
            select(self.model).where(self.model.car_id == car_id)
        ).first()

    def delete_for_car(self, car_id: int, *, commit: bool = True) -> None:
        stats = self.get_by_car(car_id)
        if stats is not None:
            self.delete(stats, commit=commit)

    def list_rows(self) -> list[CarStatsRow]:
        points = func.coalesce(CarStats.points, 0)
        stmt = (
            select(
                Car.id.label("car_id"),
                Car.model,
                Car.season_year,
                Team.name.label("team_name"),
                _zero(CarStats.races, "races"),
                _zero(CarStats.wins, "wins"),
                _zero(CarStats.poles, "poles"),
                _zero(CarStats.fastest_laps, "fastest_laps"),
                points.label("points"),
            )
            .select_from(Car)
            .join(Team, Team.id == Car.team_id)
            .join(CarStats, CarStats.car_id == Car.id, isouter=True)
            .order_by(points.desc(), Car.season_year.desc(), Car.id.asc())
        )
        return [CarStatsRow(**dict(r._mapping)) for r in self.session.exec(stmt).all()]


class DriverStatsRepository(BaseRepository[DriverStats]):
    model = DriverStats

    def get_by_driver(self, driver_id: int) -> Optional[DriverStats]:
        return self.session.exec(
            select(self.model).where(self.model.driver_id == driver_id)
        ).first()

    def delete_for_driver(self, driver_id: int, *, commit: bool = True) -> None:
        stats = self.get_by_driver(driver_id)
        if stats is not None:
            self.delete(stats, commit=commit)

    def list_rows(self) -> list[DriverStatsRow]:
        points = func.coalesce(DriverStats.points, 0)
        stmt = (
            select(
                Driver.id.label("driver_id"),
                (Driver.first_name + literal(" ") + Driver.last_name).label("driver_name"),
                Driver.last_name,
                Team.name.label("team_name"),
                _zero(DriverStats.races, "races"),
                _zero(DriverStats.wins, "wins"),
                _zero(DriverStats.podiums, "podiums"),
                _zero(DriverStats.poles, "poles"),
                points.label("points"),
                _zero(DriverStats.championships, "championships"),
            )
            .select_from(Driver)
            .join(Team, Team.id == Driver.team_id)
            .join(DriverStats, DriverStats.driver_id == Driver.id, isouter=True)
            .order_by(points.desc(), Driver.last_name.asc(), Driver.id.asc())
        )
        return [DriverStatsRow(**dict(r._mapping)) for r in self.session.exec(stmt).all()]
