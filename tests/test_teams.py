import pytest
from sqlmodel import Session

from apexgrid.core.errors import ReferentialIntegrityError, StoreUnavailableError, ValidationError
from apexgrid.db.repositories.teams import TeamRepository
from apexgrid.features.teams.services import DELETE_BLOCKED, TeamService


def test_create_team_trims_and_lists_by_name(team_service):
    team_service.create_team("  Zenith Motorsport ")
    team_service.create_team("Apex Racing", base_country="", principal="  Jordan Hale ")

    teams = team_service.list_teams()

    assert [t.name for t in teams] == ["Apex Racing", "Zenith Motorsport"]
    assert teams[0].base_country is None
    assert teams[0].principal == "Jordan Hale"


@pytest.mark.parametrize("name", [None, "", " ", "A", "  B  "])
def test_create_team_rejects_short_names(team_service, name):
    with pytest.raises(ValidationError) as exc:
        team_service.create_team(name)

    assert exc.value.messages == ["Team name must be at least 2 characters."]
    assert team_service.list_teams() == []


def test_delete_team_without_dependents(team_service, apex_team):
    assert team_service.delete_team(apex_team) is True
    assert team_service.list_teams() == []


def test_delete_unknown_team_is_noop(team_service, apex_team):
    assert team_service.delete_team(9999) is False
    assert team_service.delete_team(0) is False
    assert team_service.delete_team(None) is False
    assert len(team_service.list_teams()) == 1


def test_delete_team_blocked_by_car(team_service, car_service, apex_team):
    car_service.create_car(apex_team, "AR-01", season_year=2024)

    with pytest.raises(ReferentialIntegrityError) as exc:
        team_service.delete_team(apex_team)

    assert str(exc.value) == DELETE_BLOCKED
    assert [t.id for t in team_service.list_teams()] == [apex_team]


def test_delete_team_blocked_by_driver(team_service, driver_service, apex_team):
    driver_service.create_driver(apex_team, "Lena", "Marsh")

    with pytest.raises(ReferentialIntegrityError):
        team_service.delete_team(apex_team)

    assert len(team_service.list_teams()) == 1


def test_delete_team_allowed_once_dependents_are_gone(team_service, car_service, apex_team):
    car_id = car_service.create_car(apex_team, "AR-01", season_year=2024)
    car_service.delete_car(car_id)

    assert team_service.delete_team(apex_team) is True


def test_missing_schema_raises_store_unavailable(bare_engine):
    with Session(bare_engine) as session:
        svc = TeamService(TeamRepository(session))
        with pytest.raises(StoreUnavailableError):
            svc.list_teams()
        with pytest.raises(StoreUnavailableError):
            svc.create_team("Apex Racing")
