from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class Car(BaseModelDB, table=True):
    """Voiture d'une saison, rattachée à exactement une écurie."""
    __tablename__ = "cars"

    # RESTRICT : une écurie ne peut pas disparaître sous ses voitures
    team_id: int = Field(foreign_key="teams.id", ondelete="RESTRICT", index=True)

    model: str = Field(max_length=120)
    manufacturer: Optional[str] = Field(default=None, max_length=120)
    season_year: int = Field(index=True)
    engine: Optional[str] = Field(default=None, max_length=120)
    horsepower: Optional[int] = None
    image_url: Optional[str] = Field(default=None, max_length=500)
