from typing import List, Optional

from fastapi import APIRouter, Depends, Form, status

from apexgrid.api.v1 import pages
from apexgrid.api.v1.dependencies import (
    get_auth_service,
    get_car_service,
    get_request_context,
    get_team_service,
)
from apexgrid.core.errors import ApexGridError, ValidationError
from apexgrid.features.authentication.services import AuthService, RequestContext
from apexgrid.features.cars.services import CarService
from apexgrid.features.teams.schemas import TeamOut
from apexgrid.features.teams.services import TeamService
from apexgrid.utils.forms import as_int

router = APIRouter(
    prefix="/cars",
    tags=["cars"],
    responses={404: {"description": "Not Found"}},
)

# -------- Helpers --------

def _render(
    ctx: RequestContext,
    auth: AuthService,
    svc: CarService,
    team_svc: TeamService,
    *,
    errors: Optional[List[str]] = None,
    status_code: int = status.HTTP_200_OK,
):
    errors = list(errors or [])
    # les écuries alimentent le <select> du formulaire d'ajout
    teams = pages.load(lambda: [TeamOut.model_validate(t) for t in team_svc.list_teams()], errors, [])
    cars = pages.load(svc.list_cars, errors, [])
    return pages.render(
        ctx, auth,
        title="Cars",
        errors=errors,
        status_code=status_code,
        teams=teams,
        cars=cars,
    )

# -----------------------------
# Page catalogue
# -----------------------------
@router.get("", summary="Catalogue des voitures")
def cars_page(
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
    svc: CarService = Depends(get_car_service),
    team_svc: TeamService = Depends(get_team_service),
):
    if not ctx.user:
        return pages.redirect(ctx, "/login")
    return _render(ctx, auth, svc, team_svc)

# -----------------------------
# Actions (create_car | delete_car)
# -----------------------------
@router.post("", summary="Ajouter / supprimer une voiture")
def cars_action(
    action: str = Form(""),
    car_id: Optional[str] = Form(None, alias="id"),
    team_id: Optional[str] = Form(None),
    model: Optional[str] = Form(None),
    manufacturer: Optional[str] = Form(None),
    season_year: Optional[str] = Form(None),
    engine: Optional[str] = Form(None),
    horsepower: Optional[str] = Form(None),
    image_url: Optional[str] = Form(None),
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
    svc: CarService = Depends(get_car_service),
    team_svc: TeamService = Depends(get_team_service),
):
    if not ctx.user:
        return pages.redirect(ctx, "/login")
    try:
        if action == "create_car":
            svc.create_car(
                team_id,
                model,
                manufacturer=manufacturer,
                season_year=season_year,
                engine=engine,
                horsepower=horsepower,
                image_url=image_url,
            )
            auth.flash(ctx, "success", "Car added to catalogue.")
        elif action == "delete_car":
            if svc.delete_car(as_int(car_id)):
                auth.flash(ctx, "info", "Car deleted.")
        else:
            raise ValidationError(["Unknown action."])
    except ApexGridError as exc:
        return _render(
            ctx, auth, svc, team_svc,
            errors=pages.messages_for(exc),
            status_code=pages.status_for(exc),
        )
    return pages.redirect(ctx, "/cars")
