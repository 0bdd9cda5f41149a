"""
➡️ But : Configurer la base et gérer les sessions de base de données.

engine : connexion à la base (SQLite par défaut, sqlite:///apexgrid.db).

init_db() : crée les tables à partir des modèles SQLModel.

get_session() : dépendance FastAPI qui ouvre une session, la fournit aux routes, puis la ferme proprement.

store_errors() : traduit les erreurs "base pas prête" de SQLAlchemy en StoreUnavailableError.

🔹 Avantages :

Un seul endroit pour gérer les connexions DB.

Réutilisable par injection (Depends(get_session)).
"""

import logging
from contextlib import contextmanager
from typing import Dict, Any, Iterator, Optional

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlmodel import SQLModel, create_engine, Session

# Import all models for creating all tables
from apexgrid.db.models.users import User
from apexgrid.db.models.teams import Team
from apexgrid.db.models.cars import Car
from apexgrid.db.models.drivers import Driver
from apexgrid.db.models.stats import CarStats, DriverStats
from apexgrid.db.models.web_sessions import WebSession

from apexgrid.core.config import settings
from apexgrid.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


def enable_foreign_keys(engine: Engine) -> Engine:
    """
    SQLite n'applique les FK (RESTRICT / CASCADE) que si on le demande
    explicitement, à chaque connexion.
    """
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def _build_engine() -> Engine:
    url = settings.DATABASE_URL
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")

    connect_args: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False

    # echo seulement en dev pour ne pas polluer les logs en prod
    engine = create_engine(
        url,
        echo=(settings.ENV == "dev"),
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour MySQL/Postgres ; inutile pour SQLite
    )
    return enable_foreign_keys(engine)

engine: Engine = _build_engine()

def init_db(bind: Optional[Engine] = None) -> None:
    """
    Crée les tables si elles n'existent pas (usage dev/demo).
    En prod avec Alembic, préfère des migrations.
    """
    SQLModel.metadata.create_all(bind or engine)
    logger.info("Database schema ready (%s)", (bind or engine).url.render_as_string(hide_password=True))


def get_session():
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session


@contextmanager
def store_errors(session: Session) -> Iterator[None]:
    """
    Encadre un accès à la base : si le schéma n'existe pas ou si la connexion
    tombe, la transaction est annulée et StoreUnavailableError est levée.
    """
    try:
        yield
    except (OperationalError, ProgrammingError) as exc:
        session.rollback()
        logger.warning("Store unavailable: %s", exc.orig)
        raise StoreUnavailableError(str(exc.orig)) from exc
