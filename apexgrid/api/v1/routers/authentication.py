import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form

from apexgrid.api.v1 import pages
from apexgrid.api.v1.dependencies import get_auth_service, get_request_context
from apexgrid.core.errors import ApexGridError
from apexgrid.features.authentication.services import AuthService, RequestContext

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["auth"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Entrée : redirige selon l'état de connexion
# -----------------------------
@router.get("/", summary="Point d'entrée")
def index(ctx: RequestContext = Depends(get_request_context)):
    return pages.redirect(ctx, "/dashboard" if ctx.user else "/login")

# -----------------------------
# Login
# -----------------------------
@router.get("/login", summary="Page de connexion")
def login_page(
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
):
    if ctx.user:
        return pages.redirect(ctx, "/dashboard")
    return pages.render(ctx, auth, title="Login", email="")


@router.post("/login", summary="Se connecter")
def login(
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
):
    if ctx.user:
        return pages.redirect(ctx, "/dashboard")
    try:
        auth.sign_in(ctx, email, password)
    except ApexGridError as exc:
        return pages.render(
            ctx, auth,
            title="Login",
            errors=pages.messages_for(exc),
            status_code=pages.status_for(exc),
            email=email or "",
        )
    return pages.redirect(ctx, "/dashboard")

# -----------------------------
# Register
# -----------------------------
@router.get("/register", summary="Page d'inscription")
def register_page(
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
):
    if ctx.user:
        return pages.redirect(ctx, "/dashboard")
    return pages.render(ctx, auth, title="Register", name="", email="")


@router.post("/register", summary="Créer un compte")
def register(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    password_confirm: Optional[str] = Form(None),
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
):
    if ctx.user:
        return pages.redirect(ctx, "/dashboard")
    try:
        user_id = auth.register(name, email, password, password_confirm)
        auth.login(ctx, user_id)
        auth.flash(ctx, "success", "Account created. Welcome!")
    except ApexGridError as exc:
        return pages.render(
            ctx, auth,
            title="Register",
            errors=pages.messages_for(exc),
            status_code=pages.status_for(exc),
            name=name or "",
            email=email or "",
        )
    return pages.redirect(ctx, "/dashboard")

# -----------------------------
# Logout
# -----------------------------
@router.api_route("/logout", methods=["GET", "POST"], summary="Se déconnecter")
def logout(
    ctx: RequestContext = Depends(get_request_context),
    auth: AuthService = Depends(get_auth_service),
):
    try:
        auth.logout(ctx)
        auth.flash(ctx, "info", "You have been logged out.")
    except ApexGridError as exc:
        # Logout idempotent : base indisponible, on renvoie quand même vers le login
        logger.warning("Logout could not be recorded: %s", exc)
    return pages.redirect(ctx, "/login")
