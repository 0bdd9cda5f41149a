"""
Lignes des tableaux de stats.
Les valeurs manquantes (pas de ligne de stats) arrivent déjà à 0 depuis le SQL (COALESCE).
"""

from pydantic import BaseModel


class DriverStatsRow(BaseModel):
    driver_id: int
    driver_name: str
    last_name: str
    team_name: str
    races: int = 0
    wins: int = 0
    podiums: int = 0
    poles: int = 0
    points: int = 0
    championships: int = 0


class CarStatsRow(BaseModel):
    car_id: int
    model: str
    season_year: int
    team_name: str
    races: int = 0
    wins: int = 0
    poles: int = 0
    fastest_laps: int = 0
    points: int = 0
