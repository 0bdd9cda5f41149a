from apexgrid.db.repositories.cars import CarRepository
from apexgrid.db.repositories.drivers import DriverRepository
from apexgrid.db.repositories.teams import TeamRepository
from apexgrid.features.dashboard.schemas import DashboardOut

LATEST_CARS = 6


class DashboardService:
    """Compteurs + aperçu des dernières voitures ajoutées."""

    def __init__(self, *, team_repo: TeamRepository, car_repo: CarRepository, driver_repo: DriverRepository):
        self.team_repo = team_repo
        self.car_repo = car_repo
        self.driver_repo = driver_repo

    def overview(self) -> DashboardOut:
        with self.team_repo.guard():
            return DashboardOut(
                teams=self.team_repo.count(),
                cars=self.car_repo.count(),
                drivers=self.driver_repo.count(),
                latest_cars=self.car_repo.list_latest(limit=LATEST_CARS),
            )
