from datetime import datetime
from typing import Optional
from pydantic import BaseModel

# ---------- Outputs ----------

class UserOut(BaseModel):
    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None
    # password_hash jamais exposé

    model_config = {"from_attributes": True}


class FlashOut(BaseModel):
    type: str       # "success" | "info" | "error"
    message: str
