"""
➡️ But : Centraliser tous les paramètres configurables (nom d'app, chemin DB, secret de session, logs...)

Utilise pydantic-settings pour charger automatiquement les variables d'environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from apexgrid.core.config import settings
print(settings.APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from datetime import timedelta
from typing import Optional

from pydantic_settings import BaseSettings
from apexgrid.security.tokens import SessionTokenSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "ApexGrid"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "apexgrid.db"  # fichier SQLite
    # Pour MySQL/Postgres, définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # Sessions (cookie opaque signé)
    # -----------------------------
    SESSION_SECRET_KEY: str = "CHANGE_ME"     # ⚠️ change en prod
    SESSION_ISSUER: str = "apexgrid"
    SESSION_ALGORITHM: str = "HS256"
    SESSION_TTL_HOURS: int = 12

    SESSION_COOKIE_NAME: str = "apexgrid_session"
    SESSION_COOKIE_SAMESITE: str = "lax"        # "lax" | "strict" | "none"
    SESSION_COOKIE_SECURE: Optional[bool] = None   # auto selon ENV si None
    SESSION_COOKIE_MAX_AGE: Optional[int] = None   # auto depuis SESSION_TTL si None

    # -----------------------------
    # Mots de passe
    # -----------------------------
    # Méthode werkzeug : "scrypt" (défaut) ou "pbkdf2:sha256:<iterations>"
    PASSWORD_HASH_METHOD: str = "scrypt"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # Cookie secure auto: true en prod si non spécifié
        if self.SESSION_COOKIE_SECURE is None:
            object.__setattr__(self, "SESSION_COOKIE_SECURE", self.ENV == "prod")

        # max_age auto depuis SESSION_TTL
        if self.SESSION_COOKIE_MAX_AGE is None:
            object.__setattr__(self, "SESSION_COOKIE_MAX_AGE", self.SESSION_TTL_HOURS * 60 * 60)


# Instance globale importable partout
settings = Settings()

# Objet prêt à l'emploi pour le service d'authentification
session_token_settings = SessionTokenSettings(
    secret=settings.SESSION_SECRET_KEY,
    issuer=settings.SESSION_ISSUER,
    algorithm=settings.SESSION_ALGORITHM,
    ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
)
