from datetime import date

import pytest

from apexgrid.core.errors import ValidationError
from apexgrid.db.repositories.cars import CarRepository
from apexgrid.db.repositories.stats import CarStatsRepository
from apexgrid.db.repositories.teams import TeamRepository
from apexgrid.features.cars.services import CarService


def test_create_car_lists_with_team_and_title(car_service, apex_team):
    car_id = car_service.create_car(
        str(apex_team),
        " AR-01 ",
        manufacturer="Apex",
        season_year="2024",
        engine="V6 Hybrid",
        horsepower="850",
    )

    [car] = car_service.list_cars()
    assert car.id == car_id
    assert car.team_name == "Apex Racing"
    assert car.title == "AR-01 (2024)"
    assert car.horsepower == 850
    assert car.image_url is None


def test_create_car_adds_zeroed_stats_row(session, car_service, apex_team):
    car_id = car_service.create_car(apex_team, "AR-01", season_year=2024)

    stats = CarStatsRepository(session).get_by_car(car_id)
    assert stats is not None
    assert (stats.races, stats.wins, stats.poles, stats.fastest_laps, stats.points) == (0, 0, 0, 0, 0)


def test_catalogue_is_newest_season_first(car_service, apex_team):
    car_service.create_car(apex_team, "AR-22", season_year=2022)
    car_service.create_car(apex_team, "AR-24", season_year=2024)
    car_service.create_car(apex_team, "AR-23", season_year=2023)

    assert [c.season_year for c in car_service.list_cars()] == [2024, 2023, 2022]


def test_create_car_collects_every_error(car_service):
    with pytest.raises(ValidationError) as exc:
        car_service.create_car("42", "X", season_year="1949", horsepower="lots")

    assert exc.value.messages == [
        "Please select a team.",
        "Car model must be at least 2 characters.",
        "Please enter a realistic season year.",
        "Horsepower must be a positive number.",
    ]
    assert car_service.list_cars() == []


def test_season_year_upper_bound_is_next_year(session, apex_team):
    svc = CarService(
        CarRepository(session),
        TeamRepository(session),
        CarStatsRepository(session),
        today_fn=lambda: date(2025, 6, 1),
    )
    svc.create_car(apex_team, "AR-26", season_year=2026)

    with pytest.raises(ValidationError) as exc:
        svc.create_car(apex_team, "AR-27", season_year=2027)
    assert exc.value.messages == ["Please enter a realistic season year."]


@pytest.mark.parametrize("horsepower", ["-5", "1.5", "+12", "99999999999999999999"])
def test_horsepower_must_be_whole_number(car_service, apex_team, horsepower):
    with pytest.raises(ValidationError) as exc:
        car_service.create_car(apex_team, "AR-01", season_year=2024, horsepower=horsepower)
    assert exc.value.messages == ["Horsepower must be a positive number."]


def test_blank_horsepower_is_optional(car_service, apex_team):
    car_service.create_car(apex_team, "AR-01", season_year=2024, horsepower="  ")
    assert car_service.list_cars()[0].horsepower is None


def test_delete_car_removes_its_stats(session, car_service, apex_team):
    car_id = car_service.create_car(apex_team, "AR-01", season_year=2024)

    assert car_service.delete_car(car_id) is True
    assert car_service.list_cars() == []
    assert CarStatsRepository(session).get_by_car(car_id) is None


def test_delete_unknown_car_is_noop(car_service):
    assert car_service.delete_car(123) is False
    assert car_service.delete_car(None) is False
