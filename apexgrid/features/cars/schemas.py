from datetime import datetime
from typing import Optional
from pydantic import BaseModel, computed_field


class CarListItem(BaseModel):
    """Ligne du catalogue : la voiture + le nom de son écurie (JOIN)."""
    id: int
    team_id: int
    team_name: str
    model: str
    manufacturer: Optional[str] = None
    season_year: int
    engine: Optional[str] = None
    horsepower: Optional[int] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @computed_field  # type: ignore[misc]
    @property
    def title(self) -> str:
        return f"{self.model} ({self.season_year})"
