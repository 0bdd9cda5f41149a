import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError

from apexgrid.core.errors import InvalidCredentials, StoreUnavailableError, ValidationError
from apexgrid.db.models.base import utcnow
from apexgrid.db.models.users import User
from apexgrid.db.models.web_sessions import WebSession
from apexgrid.db.repositories.users import UserRepository
from apexgrid.db.repositories.web_sessions import WebSessionRepository
from apexgrid.features.authentication.schemas import FlashOut
from apexgrid.security.password import verify_password, hash_password
from apexgrid.security.tokens import (
    JWTError,
    SessionTokenSettings,
    create_session_token,
    decode_token,
    new_jti,
)
from apexgrid.utils.forms import clean, is_valid_email

logger = logging.getLogger(__name__)

# Sessions expirées supprimées à chaque nouvelle session (travail borné par requête)
PURGE_BATCH = 50


@dataclass
class RequestContext:
    """
    Contexte résolu une seule fois au début de chaque requête.

    - `web_session` : enregistrement serveur pointé par le cookie
    - `token` : valeur du cookie à (re)poser
    - `token_changed` : le cookie doit être réécrit dans la réponse
    - `store_error` : la base n'était pas prête (session non persistée)
    """
    web_session: WebSession
    token: str
    user: Optional[User] = None
    token_changed: bool = False
    store_error: Optional[str] = None

    @property
    def persistent(self) -> bool:
        return self.store_error is None


class AuthService:
    """
    Session Manager : orchestre users + web_sessions + jeton de cookie.
    Ne contient pas d'accès SQL direct et lève les erreurs du domaine.
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        session_repo: WebSessionRepository,
        token_settings: SessionTokenSettings,
        now_fn: Callable[[], datetime] = utcnow,
    ):
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.tokens = token_settings
        self.now_fn = now_fn

    # ---------- Ouverture de session (début de requête) ----------
    def open_session(self, token: Optional[str]) -> RequestContext:
        """
        Retrouve la session du cookie, ou en démarre une anonyme si le jeton
        est absent, illisible, expiré ou révoqué.
        """
        with self.session_repo.guard():
            record = self._resolve(token) if token else None
            if record is None:
                return self._start(user_id=None)
            return RequestContext(web_session=record, token=token)  # type: ignore[arg-type]

    def open_detached(self, error: StoreUnavailableError) -> RequestContext:
        """Contexte non persisté, utilisé quand la base n'est pas prête."""
        record = WebSession(jti="", expires_at=self.now_fn())
        return RequestContext(web_session=record, token="", store_error=str(error))

    def _resolve(self, token: str) -> Optional[WebSession]:
        try:
            decoded = decode_token(token, self.tokens)
        except JWTError:
            return None
        jti = decoded.get("jti")
        if decoded.get("typ") != "session" or not jti:
            return None
        return self.session_repo.get_active(jti, now=self.now_fn())

    def _start(self, *, user_id: Optional[int]) -> RequestContext:
        self.session_repo.delete_expired(now=self.now_fn(), limit=PURGE_BATCH, commit=False)
        jti = new_jti()
        record = self.session_repo.create(
            jti=jti,
            user_id=user_id,
            expires_at=self.now_fn() + self.tokens.ttl,
        )
        token = create_session_token(jti=jti, settings=self.tokens)
        return RequestContext(web_session=record, token=token, token_changed=True)

    def _replace(self, ctx: RequestContext, *, user_id: Optional[int]) -> None:
        """Révoque la session courante et en émet une nouvelle (nouveau JTI, nouveau cookie)."""
        if ctx.persistent and ctx.web_session.id is not None:
            self.session_repo.revoke(ctx.web_session)
        fresh = self._start(user_id=user_id)
        ctx.web_session = fresh.web_session
        ctx.token = fresh.token
        ctx.token_changed = True

    # ---------- Utilisateur courant ----------
    def current_user(self, ctx: RequestContext) -> Optional[User]:
        user_id = ctx.web_session.user_id
        if user_id is None or not ctx.persistent:
            return None
        with self.user_repo.guard():
            user = self.user_repo.get(user_id)
            if user is None:
                # la session pointe vers un compte qui n'existe plus
                logger.warning("Session %s references missing user %s; clearing", ctx.web_session.id, user_id)
                self.session_repo.update(ctx.web_session, user_id=None, updated_at=self.now_fn())
        return user

    # ---------- Sign in ----------
    def validate_login(self, email: Optional[str], password: Optional[str]) -> None:
        errors: List[str] = []
        if not is_valid_email(clean(email)):
            errors.append("Please enter a valid email address.")
        if not password:
            errors.append("Please enter your password.")
        if errors:
            raise ValidationError(errors)

    def authenticate(self, email: str, password: str) -> int:
        with self.user_repo.guard():
            user = self.user_repo.get_by_email(clean(email) or "")
        if not user or not verify_password(password, user.password_hash):
            # Ne pas révéler si l'utilisateur existe
            raise InvalidCredentials()
        return user.id

    def sign_in(self, ctx: RequestContext, email: Optional[str], password: Optional[str]) -> User:
        self.validate_login(email, password)
        user_id = self.authenticate(email or "", password or "")
        user = self.login(ctx, user_id)
        self.flash(ctx, "success", f"Welcome back, {user.name}!")
        return user

    def login(self, ctx: RequestContext, user_id: int) -> User:
        # Nouveau JTI à chaque connexion : protège contre la fixation de session
        with self.session_repo.guard():
            self._replace(ctx, user_id=user_id)
            ctx.user = self.user_repo.get(user_id)
        logger.info("User %s logged in", user_id)
        return ctx.user  # type: ignore[return-value]

    # ---------- Sign up ----------
    def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        confirm: Optional[str],
    ) -> int:
        name = clean(name) or ""
        email = clean(email) or ""
        password = password or ""
        confirm = confirm or ""

        errors: List[str] = []
        if len(name) < 2:
            errors.append("Name must be at least 2 characters.")
        if not is_valid_email(email):
            errors.append("Please enter a valid email address.")
        if len(password) < 6:
            errors.append("Password must be at least 6 characters.")
        if password != confirm:
            errors.append("Password confirmation does not match.")
        if errors:
            raise ValidationError(errors)

        taken = ValidationError(["That email is already registered. Please login instead."])
        with self.user_repo.guard():
            if self.user_repo.get_by_email(email):
                raise taken
            try:
                user = self.user_repo.create(
                    name=name,
                    email=email,
                    password_hash=hash_password(password),
                )
            except IntegrityError as exc:
                # la contrainte UNIQUE a tranché entre deux inscriptions simultanées
                self.user_repo.rollback()
                raise taken from exc
        logger.info("User registered: id=%s email=%s", user.id, email)
        return user.id

    # ---------- Logout ----------
    def logout(self, ctx: RequestContext) -> None:
        """Révoque la session ; une session anonyme neuve prend le relais (pour le flash)."""
        user_id = ctx.web_session.user_id
        if ctx.persistent:
            with self.session_repo.guard():
                self._replace(ctx, user_id=None)
        ctx.user = None
        logger.info("User %s logged out", user_id)

    # ---------- Flash (message à usage unique) ----------
    def flash(self, ctx: RequestContext, kind: str, message: str) -> None:
        if not ctx.persistent:
            return
        with self.session_repo.guard():
            self.session_repo.update(
                ctx.web_session,
                flash_type=kind,
                flash_message=message,
                updated_at=self.now_fn(),
            )

    def pop_flash(self, ctx: RequestContext) -> Optional[FlashOut]:
        record = ctx.web_session
        if not ctx.persistent or not record.flash_message:
            return None
        flash = FlashOut(type=record.flash_type or "info", message=record.flash_message)
        with self.session_repo.guard():
            self.session_repo.update(record, flash_type=None, flash_message=None, updated_at=self.now_fn())
        return flash

    # ---------- Maintenance ----------
    def purge_expired(self) -> int:
        with self.session_repo.guard():
            count = self.session_repo.delete_expired(now=self.now_fn())
        if count:
            logger.info("Purged %s expired web sessions", count)
        return count
