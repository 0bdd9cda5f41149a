# apexgrid/db/repositories/teams.py
from typing import Sequence
from sqlmodel import select, func

from apexgrid.db.repositories.base import BaseRepository
from apexgrid.db.models.teams import Team
from apexgrid.db.models.cars import Car
from apexgrid.db.models.drivers import Driver

class TeamRepository(BaseRepository[Team]):
    """CRUD Teams + requêtes spécifiques."""
    model = Team

    def list_by_name(self) -> Sequence[Team]:
        """Toutes les écuries, triées par nom."""
        stmt = select(self.model).order_by(self.model.name.asc(), self.model.id.asc())
        return self.session.exec(stmt).all()

    def count_dependents(self, team_id: int) -> int:
        """Nombre de voitures + pilotes qui référencent l'écurie."""
        cars = self.session.exec(
            select(func.count()).select_from(Car).where(Car.team_id == team_id)
        ).one()
        drivers = self.session.exec(
            select(func.count()).select_from(Driver).where(Driver.team_id == team_id)
        ).one()
        return cars + drivers
