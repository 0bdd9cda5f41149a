from typing import List
from pydantic import BaseModel, Field

from apexgrid.features.cars.schemas import CarListItem


class DashboardOut(BaseModel):
    teams: int = 0
    cars: int = 0
    drivers: int = 0
    latest_cars: List[CarListItem] = Field(default_factory=list)
