from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class TeamOut(BaseModel):
    id: int
    name: str
    base_country: Optional[str] = None
    principal: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
