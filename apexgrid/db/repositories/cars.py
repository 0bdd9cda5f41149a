# apexgrid/db/repositories/cars.py
from typing import Optional
from sqlmodel import select

from apexgrid.db.repositories.base import BaseRepository
from apexgrid.db.models.cars import Car
from apexgrid.db.models.teams import Team
from apexgrid.features.cars.schemas import CarListItem

class CarRepository(BaseRepository[Car]):
    """CRUD Cars + catalogue (JOIN teams)."""
    model = Car

    # ---------- HELPERS ----------

    def _select_car_item(self):
        """Projection SQL standardisée pour construire CarListItem."""
        return (
            select(
                Car.id,
                Car.team_id,
                Team.name.label("team_name"),
                Car.model,
                Car.manufacturer,
                Car.season_year,
                Car.engine,
                Car.horsepower,
                Car.image_url,
                Car.created_at,
            )
            .select_from(Car)
            .join(Team, Team.id == Car.team_id)
        )

    def _rows_to_items(self, rows) -> list[CarListItem]:
        return [CarListItem(**dict(r._mapping)) for r in rows]

    # ---------- LISTES ----------

    def list_catalogue(self) -> list[CarListItem]:
        """Saison la plus récente d'abord, puis voitures les plus récemment créées."""
        stmt = self._select_car_item().order_by(
            Car.season_year.desc(), Car.created_at.desc(), Car.id.desc()
        )
        return self._rows_to_items(self.session.exec(stmt).all())

    def list_latest(self, limit: Optional[int] = 6) -> list[CarListItem]:
        stmt = self._select_car_item().order_by(Car.created_at.desc(), Car.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._rows_to_items(self.session.exec(stmt).all())
