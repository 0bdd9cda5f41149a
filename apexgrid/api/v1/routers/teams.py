from typing import List, Optional

from fastapi import APIRouter, Depends, Form, status

from apexgrid.api.v1 import pages
from apexgrid.api.v1.dependencies import get_auth_service, get_request_context, get_team_service
from apexgrid.core.errors import ApexGridError, ValidationError
from apexgrid.features.authentication.services import AuthService, RequestContext
from apexgrid.features.teams.schemas import TeamOut
from apexgrid.features.teams.services import TeamService
from apexgrid.utils.forms import as_int

router = APIRouter(
    prefix="/teams",
    tags=["teams"],
    responses={404: {"description": "Not Found"}},
)

# -------- Helpers --------

def _render(
    ctx: RequestContext,
    auth: AuthService,
    svc: TeamService,
    *,
    errors: Optional[List[str]] = None,
    status_code: int = status.HTTP_200_OK,
):
    errors = list(errors or [])
    teams = pages.load(lambda: [TeamOut.model_validate(t) for t in svc.list_teams()], errors, [])
    return pages.render(ctx, auth, title="Teams", errors=errors, status_code=status_code, teams=teams)

# -----------------------------
# Page
# -----------------------------
@router.get("", summary="Lister les écuries")
def teams_page(
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
    svc: TeamService = Depends(get_team_service),
):
    if not ctx.user:
        return pages.redirect(ctx, "/login")
    return _render(ctx, auth, svc)

# -----------------------------
# Actions (create_team | delete_team)
# -----------------------------
@router.post("", summary="Créer / supprimer une écurie")
def teams_action(
    action: str = Form(""),
    team_id: Optional[str] = Form(None, alias="id"),
    name: Optional[str] = Form(None),
    base_country: Optional[str] = Form(None),
    principal: Optional[str] = Form(None),
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
    svc: TeamService = Depends(get_team_service),
):
    if not ctx.user:
        return pages.redirect(ctx, "/login")
    try:
        if action == "create_team":
            svc.create_team(name, base_country=base_country, principal=principal)
            auth.flash(ctx, "success", "Team created.")
        elif action == "delete_team":
            if svc.delete_team(as_int(team_id)):
                auth.flash(ctx, "info", "Team deleted.")
        else:
            raise ValidationError(["Unknown action."])
    except ApexGridError as exc:
        return _render(ctx, auth, svc, errors=pages.messages_for(exc), status_code=pages.status_for(exc))
    return pages.redirect(ctx, "/teams")
