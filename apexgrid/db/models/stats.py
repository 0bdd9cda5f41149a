"""
➡️ But : Statistiques de saison, séparées des voitures/pilotes.

Une ligne au plus par voiture / par pilote (clé UNIQUE), supprimée en
cascade avec son propriétaire. Aucune valeur négative n'est acceptée.
"""

from sqlalchemy import CheckConstraint
from sqlmodel import Field

from .base import BaseModelDB


def _non_negative(table: str, *columns: str) -> tuple:
    return tuple(
        CheckConstraint(f"{col} >= 0", name=f"ck_{table}_{col}_non_negative")
        for col in columns
    )


class CarStats(BaseModelDB, table=True):
    __tablename__ = "car_stats"
    __table_args__ = _non_negative("car_stats", "races", "wins", "poles", "fastest_laps", "points")

    car_id: int = Field(foreign_key="cars.id", ondelete="CASCADE", unique=True, index=True)

    races: int = 0
    wins: int = 0
    poles: int = 0
    fastest_laps: int = 0
    points: int = 0


class DriverStats(BaseModelDB, table=True):
    __tablename__ = "driver_stats"
    __table_args__ = _non_negative(
        "driver_stats", "races", "wins", "podiums", "poles", "points", "championships"
    )

    driver_id: int = Field(foreign_key="drivers.id", ondelete="CASCADE", unique=True, index=True)

    races: int = 0
    wins: int = 0
    podiums: int = 0
    poles: int = 0
    points: int = 0
    championships: int = 0
