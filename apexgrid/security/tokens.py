import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TypedDict

from jose import jwt, JWTError

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation du jeton de session
# ==========================================================

@dataclass(frozen=True)
class SessionTokenSettings:
    """
    Configuration du jeton de session posé en cookie.

    - `secret` : clé secrète pour signer/valider les jetons
    - `issuer` : émetteur (utilisé dans le payload)
    - `algorithm` : algo de signature (HS256 recommandé)
    - `ttl` : durée de vie d'une session
    """
    secret: str
    issuer: str = "apexgrid"
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(hours=12)


# ==========================================================
# 🧱 Types
# ==========================================================

class DecodedToken(TypedDict, total=False):
    iss: str
    typ: str            # "session"
    jti: str            # clé de l'enregistrement côté serveur
    iat: int
    exp: int


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)

def new_jti() -> str:
    """Crée un identifiant unique (et imprévisible) pour une session."""
    return uuid.uuid4().hex


# ==========================================================
# 🎟️ Génération
# ==========================================================

def create_session_token(*, jti: str, settings: SessionTokenSettings) -> str:
    """
    Crée le jeton opaque du cookie de session.
    Il ne transporte aucune donnée utilisateur : seulement le JTI qui pointe
    vers l'enregistrement `web_sessions` côté serveur.
    """
    now = _now()
    payload: DecodedToken = {
        "iss": settings.issuer,
        "typ": "session",
        "jti": jti,
        "iat": int(now.timestamp()),
        "exp": int((now + settings.ttl).timestamp()),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.algorithm)


# ==========================================================
# 🔍 Décodage / Validation
# ==========================================================

def decode_token(token: str, settings: SessionTokenSettings) -> DecodedToken:
    """
    Décode et valide un jeton (signature + expiration + émetteur).
    Lève JWTError en cas de signature invalide ou expirée.
    """
    decoded = jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        issuer=settings.issuer,
        options={"verify_aud": False},
    )
    return decoded  # type: ignore[return-value]


__all__ = [
    "JWTError",
    "SessionTokenSettings",
    "DecodedToken",
    "new_jti",
    "create_session_token",
    "decode_token",
]
