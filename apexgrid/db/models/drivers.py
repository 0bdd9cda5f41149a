from datetime import date
from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class Driver(BaseModelDB, table=True):
    """Pilote, rattaché à exactement une écurie."""
    __tablename__ = "drivers"

    team_id: int = Field(foreign_key="teams.id", ondelete="RESTRICT", index=True)

    first_name: str = Field(max_length=80)
    last_name: str = Field(index=True, max_length=80)
    nationality: Optional[str] = Field(default=None, max_length=80)
    date_of_birth: Optional[date] = None
    driver_number: Optional[int] = None
