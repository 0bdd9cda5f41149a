from sqlmodel import Field
from typing import Optional
from datetime import datetime

from .base import BaseModelDB

class WebSession(BaseModelDB, table=True):
    """
    Session navigateur côté serveur, pointée par le JTI du cookie.
    user_id vaut None pour une session anonyme (page de login, flash de logout).
    Pas de FK vers users : une session peut survivre à son utilisateur.
    """
    __tablename__ = "web_sessions"

    jti: str = Field(index=True, unique=True)
    user_id: Optional[int] = Field(default=None, index=True)
    flash_type: Optional[str] = Field(default=None, max_length=20)
    flash_message: Optional[str] = Field(default=None, max_length=255)
    expires_at: datetime = Field(index=True)
    revoked_at: Optional[datetime] = Field(default=None)
