"""
➡️ But : Couche de présentation commune à toutes les pages.

- traduit les erreurs du domaine en messages + codes HTTP ;
- construit la réponse "page" (JSON) : titre, utilisateur, flash, erreurs, listes ;
- (re)pose le cookie de session quand il a changé ;
- redirige en 303 après un POST réussi (Post/Redirect/Get).
"""

from typing import Any, Callable, List, Optional, Sequence, TypeVar

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse, Response

from apexgrid.core.config import settings
from apexgrid.core.errors import (
    ApexGridError,
    AuthError,
    ReferentialIntegrityError,
    StoreUnavailableError,
    ValidationError,
)
from apexgrid.features.authentication.schemas import UserOut
from apexgrid.features.authentication.services import AuthService, RequestContext

T = TypeVar("T")

STORE_HINT = "Database not ready. Start the app once (init_db) to create the tables, then retry."


# -----------------------------
# Erreurs -> messages / statuts
# -----------------------------
def messages_for(exc: ApexGridError) -> List[str]:
    if isinstance(exc, ValidationError):
        return list(exc.messages)
    if isinstance(exc, StoreUnavailableError):
        return [STORE_HINT]
    return [str(exc)]


def status_for(exc: ApexGridError) -> int:
    if isinstance(exc, AuthError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, ReferentialIntegrityError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, StoreUnavailableError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_400_BAD_REQUEST


def load(fetch: Callable[[], T], errors: List[str], default: T) -> T:
    """Liste dégradée : si la base n'est pas prête, on affiche `default` + le message."""
    try:
        return fetch()
    except StoreUnavailableError:
        if STORE_HINT not in errors:
            errors.append(STORE_HINT)
        return default


# -----------------------------
# Réponses
# -----------------------------
def write_cookie(ctx: RequestContext, response: Response) -> Response:
    if ctx.token_changed and ctx.token:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=ctx.token,
            httponly=True,
            samesite=settings.SESSION_COOKIE_SAMESITE,
            secure=settings.SESSION_COOKIE_SECURE,
            max_age=settings.SESSION_COOKIE_MAX_AGE,
            path="/",
        )
    return response


def redirect(ctx: RequestContext, url: str) -> Response:
    return write_cookie(ctx, RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER))


def render(
    ctx: RequestContext,
    auth: AuthService,
    *,
    title: str,
    errors: Optional[Sequence[str]] = None,
    status_code: int = status.HTTP_200_OK,
    **data: Any,
) -> Response:
    messages = list(errors or [])
    if ctx.store_error and STORE_HINT not in messages:
        messages.insert(0, STORE_HINT)

    payload = {
        "title": f"{title} · {settings.APP_NAME}",
        "user": UserOut.model_validate(ctx.user) if ctx.user else None,
        "flash": auth.pop_flash(ctx),
        "errors": messages,
        **data,
    }
    return write_cookie(ctx, JSONResponse(content=jsonable_encoder(payload), status_code=status_code))
