# apexgrid/db/repositories/drivers.py
from sqlmodel import select

from apexgrid.db.repositories.base import BaseRepository
from apexgrid.db.models.drivers import Driver
from apexgrid.db.models.teams import Team
from apexgrid.features.drivers.schemas import DriverListItem

class DriverRepository(BaseRepository[Driver]):
    """CRUD Drivers + liste avec le nom de l'écurie."""
    model = Driver

    def list_with_team(self) -> list[DriverListItem]:
        stmt = (
            select(
                Driver.id,
                Driver.team_id,
                Team.name.label("team_name"),
                Driver.first_name,
                Driver.last_name,
                Driver.nationality,
                Driver.date_of_birth,
                Driver.driver_number,
                Driver.created_at,
            )
            .select_from(Driver)
            .join(Team, Team.id == Driver.team_id)
            .order_by(Driver.last_name.asc(), Driver.first_name.asc(), Driver.id.asc())
        )
        return [DriverListItem(**dict(r._mapping)) for r in self.session.exec(stmt).all()]
