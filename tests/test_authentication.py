from datetime import timedelta

import pytest
from sqlmodel import Session

from apexgrid.core.config import session_token_settings
from apexgrid.core.errors import InvalidCredentials, StoreUnavailableError, ValidationError
from apexgrid.db.models.base import utcnow
from apexgrid.db.repositories.users import UserRepository
from apexgrid.db.repositories.web_sessions import WebSessionRepository
from apexgrid.features.authentication.services import AuthService


@pytest.fixture
def user_id(auth_service) -> int:
    return auth_service.register("Ada Admin", "ada@apexgrid.io", "secret123", "secret123")


def test_register_then_authenticate(auth_service, user_id):
    assert auth_service.authenticate("ada@apexgrid.io", "secret123") == user_id
    assert auth_service.authenticate("  ada@apexgrid.io ", "secret123") == user_id


def test_password_is_stored_hashed(session, user_id):
    user = UserRepository(session).get(user_id)
    assert user.password_hash != "secret123"


def test_register_reports_every_problem(auth_service):
    with pytest.raises(ValidationError) as exc:
        auth_service.register("A", "not-an-email", "123", "456")

    assert exc.value.messages == [
        "Name must be at least 2 characters.",
        "Please enter a valid email address.",
        "Password must be at least 6 characters.",
        "Password confirmation does not match.",
    ]


def test_register_rejects_taken_email(auth_service, user_id):
    with pytest.raises(ValidationError) as exc:
        auth_service.register("Ada Again", "ada@apexgrid.io", "secret456", "secret456")
    assert exc.value.messages == ["That email is already registered. Please login instead."]


@pytest.mark.parametrize(
    "email, password",
    [("ada@apexgrid.io", "wrong-pass"), ("nobody@apexgrid.io", "secret123")],
)
def test_bad_credentials_share_one_message(auth_service, user_id, email, password):
    with pytest.raises(InvalidCredentials) as exc:
        auth_service.authenticate(email, password)
    assert str(exc.value) == "Invalid email or password."


def test_validate_login_requires_both_fields(auth_service):
    with pytest.raises(ValidationError) as exc:
        auth_service.validate_login("", "")
    assert exc.value.messages == ["Please enter a valid email address.", "Please enter your password."]


def test_open_session_without_cookie_starts_anonymous_session(auth_service):
    ctx = auth_service.open_session(None)

    assert ctx.token_changed is True
    assert ctx.web_session.id is not None
    assert ctx.web_session.user_id is None
    assert auth_service.current_user(ctx) is None


def test_open_session_reuses_valid_cookie(auth_service):
    first = auth_service.open_session(None)
    again = auth_service.open_session(first.token)

    assert again.web_session.jti == first.web_session.jti
    assert again.token_changed is False


def test_garbage_cookie_gets_fresh_session(auth_service):
    ctx = auth_service.open_session("not-a-token")
    assert ctx.token_changed is True
    assert ctx.token != "not-a-token"


def test_login_issues_new_session_id(auth_service, user_id):
    ctx = auth_service.open_session(None)
    old_jti, old_token, old_record = ctx.web_session.jti, ctx.token, ctx.web_session

    user = auth_service.login(ctx, user_id)

    assert user.id == user_id
    assert ctx.web_session.jti != old_jti
    assert ctx.token != old_token
    assert ctx.token_changed is True
    assert old_record.revoked_at is not None
    # l'ancien cookie ne donne plus accès à la session connectée
    assert auth_service.open_session(old_token).web_session.user_id is None
    assert auth_service.current_user(auth_service.open_session(ctx.token)).id == user_id


def test_sign_in_sets_welcome_flash(auth_service, user_id):
    ctx = auth_service.open_session(None)
    auth_service.sign_in(ctx, "ada@apexgrid.io", "secret123")

    flash = auth_service.pop_flash(ctx)
    assert flash.type == "success"
    assert flash.message == "Welcome back, Ada Admin!"


def test_flash_is_shown_once(auth_service):
    ctx = auth_service.open_session(None)
    auth_service.flash(ctx, "info", "Team created.")

    # relu depuis un nouveau contexte, comme à la requête suivante
    next_ctx = auth_service.open_session(ctx.token)
    assert auth_service.pop_flash(next_ctx).message == "Team created."
    assert auth_service.pop_flash(auth_service.open_session(ctx.token)) is None


def test_logout_revokes_session(auth_service, user_id):
    ctx = auth_service.open_session(None)
    auth_service.login(ctx, user_id)
    logged_in_token = ctx.token

    auth_service.logout(ctx)

    assert ctx.user is None
    assert ctx.web_session.user_id is None
    assert ctx.token != logged_in_token
    assert auth_service.current_user(auth_service.open_session(logged_in_token)) is None


def test_deleted_user_is_dropped_from_session(session, auth_service, user_id):
    ctx = auth_service.open_session(None)
    auth_service.login(ctx, user_id)

    users = UserRepository(session)
    users.delete(users.get(user_id))

    fresh = auth_service.open_session(ctx.token)
    assert auth_service.current_user(fresh) is None
    assert fresh.web_session.user_id is None


def _auth_at(session, shift: timedelta) -> AuthService:
    return AuthService(
        user_repo=UserRepository(session),
        session_repo=WebSessionRepository(session),
        token_settings=session_token_settings,
        now_fn=lambda: utcnow() + shift,
    )


def test_timestamps_are_written_timezone_aware(auth_service):
    assert utcnow().utcoffset() == timedelta(0)

    ctx = auth_service.open_session(None)
    auth_service.flash(ctx, "info", "Team created.")

    # relu depuis la base : la comparaison d'expiration se fait côté SQL
    assert auth_service.open_session(ctx.token).web_session.jti == ctx.web_session.jti


def test_expired_session_is_not_resumed(session, auth_service):
    ctx = auth_service.open_session(None)
    old_jti = ctx.web_session.jti

    resumed = _auth_at(session, timedelta(hours=13)).open_session(ctx.token)

    assert resumed.web_session.jti != old_jti
    assert resumed.token_changed is True


def test_new_sessions_purge_expired_rows(session, auth_service):
    repo = WebSessionRepository(session)
    stale = [auth_service.open_session(None).web_session.jti for _ in range(3)]

    # une requête sans cookie, 13 h plus tard, sans redémarrage
    _auth_at(session, timedelta(hours=13)).open_session(None)

    assert all(repo.get_by_jti(jti) is None for jti in stale)
    assert repo.count() == 1


def test_purge_is_bounded_per_call(session, auth_service):
    repo = WebSessionRepository(session)
    for _ in range(3):
        auth_service.open_session(None)

    removed = repo.delete_expired(now=utcnow() + timedelta(hours=13), limit=2)

    assert removed == 2
    assert repo.count() == 1
    assert _auth_at(session, timedelta(hours=13)).purge_expired() == 1


def test_missing_schema_falls_back_to_detached_context(bare_engine):
    with Session(bare_engine) as session:
        auth = AuthService(
            user_repo=UserRepository(session),
            session_repo=WebSessionRepository(session),
            token_settings=session_token_settings,
        )
        with pytest.raises(StoreUnavailableError) as exc:
            auth.open_session(None)

        ctx = auth.open_detached(exc.value)
        assert ctx.persistent is False
        assert auth.current_user(ctx) is None
        auth.flash(ctx, "info", "ignored")
        assert auth.pop_flash(ctx) is None
