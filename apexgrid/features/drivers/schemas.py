from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, computed_field


class DriverListItem(BaseModel):
    id: int
    team_id: int
    team_name: str
    first_name: str
    last_name: str
    nationality: Optional[str] = None
    date_of_birth: Optional[date] = None
    driver_number: Optional[int] = None
    created_at: Optional[datetime] = None

    @computed_field  # type: ignore[misc]
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
