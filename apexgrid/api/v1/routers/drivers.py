from typing import List, Optional

from fastapi import APIRouter, Depends, Form, status

from apexgrid.api.v1 import pages
from apexgrid.api.v1.dependencies import (
    get_auth_service,
    get_driver_service,
    get_request_context,
    get_team_service,
)
from apexgrid.core.errors import ApexGridError, ValidationError
from apexgrid.features.authentication.services import AuthService, RequestContext
from apexgrid.features.drivers.services import DriverService
from apexgrid.features.teams.schemas import TeamOut
from apexgrid.features.teams.services import TeamService
from apexgrid.utils.forms import as_int

router = APIRouter(
    prefix="/drivers",
    tags=["drivers"],
    responses={404: {"description": "Not Found"}},
)

def _render(
    ctx: RequestContext,
    auth: AuthService,
    svc: DriverService,
    team_svc: TeamService,
    *,
    errors: Optional[List[str]] = None,
    status_code: int = status.HTTP_200_OK,
):
    errors = list(errors or [])
    teams = pages.load(lambda: [TeamOut.model_validate(t) for t in team_svc.list_teams()], errors, [])
    drivers = pages.load(svc.list_drivers, errors, [])
    return pages.render(
        ctx, auth,
        title="Drivers",
        errors=errors,
        status_code=status_code,
        teams=teams,
        drivers=drivers,
    )


@router.get("", summary="Lister les pilotes")
def drivers_page(
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
    svc: DriverService = Depends(get_driver_service),
    team_svc: TeamService = Depends(get_team_service),
):
    if not ctx.user:
        return pages.redirect(ctx, "/login")
    return _render(ctx, auth, svc, team_svc)


@router.post("", summary="Ajouter / supprimer un pilote")
def drivers_action(
    action: str = Form(""),
    driver_id: Optional[str] = Form(None, alias="id"),
    team_id: Optional[str] = Form(None),
    first_name: Optional[str] = Form(None),
    last_name: Optional[str] = Form(None),
    nationality: Optional[str] = Form(None),
    date_of_birth: Optional[str] = Form(None),
    driver_number: Optional[str] = Form(None),
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
    svc: DriverService = Depends(get_driver_service),
    team_svc: TeamService = Depends(get_team_service),
):
    if not ctx.user:
        return pages.redirect(ctx, "/login")
    try:
        if action == "create_driver":
            svc.create_driver(
                team_id,
                first_name,
                last_name,
                nationality=nationality,
                date_of_birth=date_of_birth,
                driver_number=driver_number,
            )
            auth.flash(ctx, "success", "Driver created.")
        elif action == "delete_driver":
            if svc.delete_driver(as_int(driver_id)):
                auth.flash(ctx, "info", "Driver deleted.")
        else:
            raise ValidationError(["Unknown action."])
    except ApexGridError as exc:
        return _render(
            ctx, auth, svc, team_svc,
            errors=pages.messages_for(exc),
            status_code=pages.status_for(exc),
        )
    return pages.redirect(ctx, "/drivers")
