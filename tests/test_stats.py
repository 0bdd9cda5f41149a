import pytest

from apexgrid.core.errors import ValidationError
from apexgrid.db.repositories.stats import CarStatsRepository, DriverStatsRepository
from apexgrid.utils.forms import INT_MAX


@pytest.fixture
def car_id(car_service, apex_team) -> int:
    return car_service.create_car(apex_team, "AR-01", season_year=2024)


@pytest.fixture
def driver_id(driver_service, apex_team) -> int:
    return driver_service.create_driver(apex_team, "Lena", "Marsh")


def test_upsert_driver_stats_is_idempotent(stats_service, driver_id):
    for _ in range(2):
        stats_service.upsert_driver_stats(
            str(driver_id), races="10", wins="3", podiums="6", poles="2", points="180", championships="1",
        )

    [row] = stats_service.list_driver_stats()
    assert row.driver_name == "Lena Marsh"
    assert row.team_name == "Apex Racing"
    assert (row.races, row.wins, row.podiums, row.poles, row.points, row.championships) == (10, 3, 6, 2, 180, 1)


def test_upsert_clamps_negative_and_non_numeric_values(stats_service, car_id):
    stats_service.upsert_car_stats(car_id, races="-5", wins="abc", poles="", fastest_laps=None, points="44")

    [row] = stats_service.list_car_stats()
    assert (row.races, row.wins, row.poles, row.fastest_laps, row.points) == (0, 0, 0, 0, 44)


def test_upsert_reads_leading_integer(stats_service, car_id):
    stats_service.upsert_car_stats(car_id, races="5.5", wins=" 3 wins", poles="-2.7", points="12abc")

    [row] = stats_service.list_car_stats()
    assert (row.races, row.wins, row.poles, row.points) == (5, 3, 0, 12)


def test_upsert_saturates_huge_values(stats_service, driver_id):
    stats_service.upsert_driver_stats(driver_id, races="99999999999999999999", points="7")

    [row] = stats_service.list_driver_stats()
    assert row.races == INT_MAX
    assert row.points == 7


def test_upsert_creates_missing_stats_row(session, stats_service, car_id):
    repo = CarStatsRepository(session)
    repo.delete_for_car(car_id)
    assert repo.get_by_car(car_id) is None

    stats_service.upsert_car_stats(car_id, races=4, wins=1)

    stats = repo.get_by_car(car_id)
    assert stats is not None
    assert (stats.races, stats.wins) == (4, 1)


def test_driver_without_stats_row_reports_zeros(session, stats_service, driver_id):
    DriverStatsRepository(session).delete_for_driver(driver_id)

    [row] = stats_service.list_driver_stats()
    assert row.driver_id == driver_id
    assert (row.races, row.points) == (0, 0)


def test_upsert_rejects_unknown_targets(stats_service):
    with pytest.raises(ValidationError) as exc:
        stats_service.upsert_driver_stats("999", races=1)
    assert exc.value.messages == ["Invalid driver selection."]

    with pytest.raises(ValidationError) as exc:
        stats_service.upsert_car_stats("nope", races=1)
    assert exc.value.messages == ["Invalid car selection."]


def test_driver_standings_order(stats_service, driver_service, apex_team):
    marsh = driver_service.create_driver(apex_team, "Lena", "Marsh")
    ellis = driver_service.create_driver(apex_team, "Noah", "Ellis")
    varga = driver_service.create_driver(apex_team, "Tom", "Varga")
    stats_service.upsert_driver_stats(marsh, points=100)
    stats_service.upsert_driver_stats(ellis, points=50)
    stats_service.upsert_driver_stats(varga, points=100)

    rows = stats_service.list_driver_stats()
    # égalité de points : ordre alphabétique du nom
    assert [r.driver_id for r in rows] == [marsh, varga, ellis]


def test_car_standings_order(stats_service, car_service, apex_team):
    older = car_service.create_car(apex_team, "AR-23", season_year=2023)
    newer = car_service.create_car(apex_team, "AR-24", season_year=2024)
    leader = car_service.create_car(apex_team, "AR-22", season_year=2022)
    stats_service.upsert_car_stats(leader, points=300)

    rows = stats_service.list_car_stats()
    assert [r.car_id for r in rows] == [leader, newer, older]
