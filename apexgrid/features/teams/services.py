"""
➡️ But : Contenir la logique métier des écuries : valider, orchestrer le repo, gérer les erreurs.

TeamService : applique les validations (nom >= 2 caractères) et la règle RESTRICT
à la suppression (pas de suppression tant qu'une voiture ou un pilote y est rattaché).

🔹 Avantages :

Code métier découplé du web.

Test unitaire possible sans passer par FastAPI.
"""

import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError

from apexgrid.core.errors import ReferentialIntegrityError, ValidationError
from apexgrid.db.repositories.teams import TeamRepository
from apexgrid.db.models.teams import Team
from apexgrid.utils.forms import clean

logger = logging.getLogger(__name__)

DELETE_BLOCKED = "Could not delete team. Remove related cars/drivers first."


class TeamService:
    def __init__(self, repo: TeamRepository):
        self.repo = repo

    def list_teams(self) -> Sequence[Team]:
        with self.repo.guard():
            return self.repo.list_by_name()

    def create_team(
        self,
        name: Any,
        base_country: Any = None,
        principal: Any = None,
    ) -> int:
        name = clean(name) or ""
        errors: List[str] = []
        if len(name) < 2:
            errors.append("Team name must be at least 2 characters.")
        if errors:
            raise ValidationError(errors)

        with self.repo.guard():
            team = self.repo.create(
                name=name,
                base_country=clean(base_country),
                principal=clean(principal),
            )
        logger.info("Team created: id=%s name=%r", team.id, team.name)
        return team.id

    def delete_team(self, team_id: Optional[int]) -> bool:
        """True si une écurie a été supprimée ; id inconnu = no-op."""
        if not team_id or team_id <= 0:
            return False
        with self.repo.guard():
            team = self.repo.get(team_id)
            if team is None:
                return False
            if self.repo.count_dependents(team_id) > 0:
                logger.warning("Team delete blocked: id=%s still referenced", team_id)
                raise ReferentialIntegrityError(DELETE_BLOCKED)
            try:
                self.repo.delete(team)
            except IntegrityError as exc:
                # la FK RESTRICT a tranché (insertion concurrente)
                self.repo.rollback()
                logger.warning("Team delete blocked by FK: id=%s", team_id)
                raise ReferentialIntegrityError(DELETE_BLOCKED) from exc
        logger.info("Team deleted: id=%s", team_id)
        return True
