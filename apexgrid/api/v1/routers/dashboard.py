from fastapi import APIRouter, Depends

from apexgrid.api.v1 import pages
from apexgrid.api.v1.dependencies import get_auth_service, get_dashboard_service, get_request_context
from apexgrid.features.authentication.services import AuthService, RequestContext
from apexgrid.features.dashboard.schemas import DashboardOut
from apexgrid.features.dashboard.services import DashboardService

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get("", summary="Vue d'ensemble (compteurs + dernières voitures)")
def dashboard_page(
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
    svc: DashboardService = Depends(get_dashboard_service),
):
    if not ctx.user:
        return pages.redirect(ctx, "/login")
    errors: list[str] = []
    overview = pages.load(svc.overview, errors, DashboardOut())
    return pages.render(ctx, auth, title="Dashboard", errors=errors, overview=overview)
