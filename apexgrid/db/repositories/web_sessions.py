from datetime import datetime
from typing import Optional
from sqlmodel import select

from apexgrid.db.repositories.base import BaseRepository
from apexgrid.db.models.base import utcnow
from apexgrid.db.models.web_sessions import WebSession

class WebSessionRepository(BaseRepository[WebSession]):
    model = WebSession

    def get_by_jti(self, jti: str) -> Optional[WebSession]:
        return self.session.exec(
            select(self.model).where(self.model.jti == jti)
        ).first()

    def get_active(self, jti: str, *, now: datetime) -> Optional[WebSession]:
        """Session existante, non révoquée et non expirée (filtrée côté SQL)."""
        return self.session.exec(
            select(self.model).where(
                self.model.jti == jti,
                self.model.revoked_at.is_(None),  # type: ignore[union-attr]
                self.model.expires_at > now,
            )
        ).first()

    def revoke(self, record: WebSession, *, commit: bool = True) -> None:
        if record.revoked_at is not None:
            return
        self.update(record, revoked_at=utcnow(), updated_at=utcnow(), commit=commit)

    def delete_expired(self, *, now: datetime, limit: Optional[int] = None, commit: bool = True) -> int:
        """Supprime les sessions expirées ; `limit` borne le travail par appel."""
        stmt = select(self.model).where(self.model.expires_at <= now).order_by(self.model.expires_at)
        if limit is not None:
            stmt = stmt.limit(limit)
        expired = self.session.exec(stmt).all()
        for record in expired:
            self.session.delete(record)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        return len(expired)
