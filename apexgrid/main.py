"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l'instance FastAPI (app).

Configure :

les logs (niveau via LOG_LEVEL)

titre, version, tags

schéma OpenAPI personnalisé

Inclut les routers (login, register, dashboard, teams, cars, drivers, stats).

Initialise la base au démarrage (@app.on_event("startup")).

🔹 Avantages :

Centralise la configuration du serveur HTTP.

Point unique d'exécution : uvicorn apexgrid.main:app --reload.
"""

import logging

from fastapi import FastAPI
from sqlmodel import Session

from apexgrid.core.config import settings, session_token_settings
from apexgrid.core.logging import configure_logging
from apexgrid.core.openapi import custom_openapi
from apexgrid.db.session import engine, init_db
from apexgrid.db.repositories.users import UserRepository
from apexgrid.db.repositories.web_sessions import WebSessionRepository
from apexgrid.features.authentication.services import AuthService

from apexgrid.api.v1.routers import authentication, dashboard, teams, cars, drivers, stats

import uvicorn

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    openapi_tags=[
        {"name": "auth", "description": "Connexion, inscription, déconnexion"},
        {"name": "dashboard", "description": "Vue d'ensemble"},
        {"name": "teams", "description": "Écuries"},
        {"name": "cars", "description": "Catalogue des voitures"},
        {"name": "drivers", "description": "Pilotes"},
        {"name": "stats", "description": "Statistiques pilotes / voitures"},
    ],
)

# Routers (pages : une route par module, POST aiguillé par le champ `action`)
app.include_router(authentication.router)
app.include_router(dashboard.router)
app.include_router(teams.router)
app.include_router(cars.router)
app.include_router(drivers.router)
app.include_router(stats.router)

# Génération du schéma OpenAPI custom (facultatif, mais propre)
app.openapi = lambda: custom_openapi(app)

# Démarrage
@app.on_event("startup")
def on_startup():
    init_db()
    with Session(engine) as session:
        AuthService(
            user_repo=UserRepository(session),
            session_repo=WebSessionRepository(session),
            token_settings=session_token_settings,
        ).purge_expired()
    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)

if __name__ == "__main__":
    uvicorn.run("apexgrid.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
