import logging

from apexgrid.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Installe un handler console unique ; appelée au démarrage de l'app."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # L'echo SQL passe par le logger sqlalchemy.engine ; on le garde en dev seulement
    if settings.ENV != "dev":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
