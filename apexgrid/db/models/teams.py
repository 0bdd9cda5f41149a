from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class Team(BaseModelDB, table=True):
    """Écurie (constructeur). Possède des voitures et des pilotes."""
    __tablename__ = "teams"

    name: str = Field(index=True, max_length=120)
    base_country: Optional[str] = Field(default=None, max_length=80)
    principal: Optional[str] = Field(default=None, max_length=120, description="Team principal")
