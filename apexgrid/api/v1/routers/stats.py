from typing import List, Optional

from fastapi import APIRouter, Depends, Form, status

from apexgrid.api.v1 import pages
from apexgrid.api.v1.dependencies import get_auth_service, get_request_context, get_stats_service
from apexgrid.core.errors import ApexGridError, ValidationError
from apexgrid.features.authentication.services import AuthService, RequestContext
from apexgrid.features.stats.services import StatsService

router = APIRouter(
    prefix="/stats",
    tags=["stats"],
    responses={404: {"description": "Not Found"}},
)

def _render(
    ctx: RequestContext,
    auth: AuthService,
    svc: StatsService,
    *,
    errors: Optional[List[str]] = None,
    status_code: int = status.HTTP_200_OK,
):
    errors = list(errors or [])
    driver_stats = pages.load(svc.list_driver_stats, errors, [])
    car_stats = pages.load(svc.list_car_stats, errors, [])
    return pages.render(
        ctx, auth,
        title="Stats",
        errors=errors,
        status_code=status_code,
        driver_stats=driver_stats,
        car_stats=car_stats,
    )


@router.get("", summary="Classements pilotes et voitures")
def stats_page(
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
    svc: StatsService = Depends(get_stats_service),
):
    if not ctx.user:
        return pages.redirect(ctx, "/login")
    return _render(ctx, auth, svc)


@router.post("", summary="Mettre à jour les stats d'un pilote ou d'une voiture")
def stats_action(
    action: str = Form(""),
    driver_id: Optional[str] = Form(None),
    car_id: Optional[str] = Form(None),
    races: Optional[str] = Form(None),
    wins: Optional[str] = Form(None),
    podiums: Optional[str] = Form(None),
    poles: Optional[str] = Form(None),
    fastest_laps: Optional[str] = Form(None),
    points: Optional[str] = Form(None),
    championships: Optional[str] = Form(None),
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
    svc: StatsService = Depends(get_stats_service),
):
    if not ctx.user:
        return pages.redirect(ctx, "/login")
    try:
        if action == "update_driver_stats":
            svc.upsert_driver_stats(
                driver_id,
                races=races,
                wins=wins,
                podiums=podiums,
                poles=poles,
                points=points,
                championships=championships,
            )
            auth.flash(ctx, "success", "Driver stats updated.")
        elif action == "update_car_stats":
            svc.upsert_car_stats(
                car_id,
                races=races,
                wins=wins,
                poles=poles,
                fastest_laps=fastest_laps,
                points=points,
            )
            auth.flash(ctx, "success", "Car stats updated.")
        else:
            raise ValidationError(["Unknown action."])
    except ApexGridError as exc:
        return _render(ctx, auth, svc, errors=pages.messages_for(exc), status_code=pages.status_for(exc))
    return pages.redirect(ctx, "/stats")
