import json

import pytest

from rosterstore.core.errors import MaxMembersReached, MinMembersRequired, NotFound, ValidationFailed
from rosterstore.models.team import Student
from rosterstore.storage.backing_store import KeyValueStore
from rosterstore.teams.roster import (
    MEMBER_COUNT_OUT_OF_RANGE,
    MEMBER_FIELDS_REQUIRED,
    MEMBER_INDEX_OUT_OF_RANGE,
    TEAM_NAME_REQUIRED,
    RosterManager,
    validate_team,
)


@pytest.mark.parametrize('member_count', [2, 3, 4])
def test_create_team_accepts_two_to_four_members(roster: RosterManager, students: list[dict], member_count: int) -> None:
    team = roster.create_team('Rockets', students[:member_count])

    assert len(team.members) == member_count
    assert roster.get_team(team.id) == team


@pytest.mark.parametrize('member_count', [0, 1, 5])
def test_create_team_rejects_member_count_outside_range(roster: RosterManager, store: KeyValueStore, students: list[dict], member_count: int) -> None:
    roster.create_team('Existing', students[:2])
    stored_before = store.get('teams')

    with pytest.raises(ValidationFailed) as exception_info:
        roster.create_team('Rockets', students[:member_count])

    assert exception_info.value.reason == MEMBER_COUNT_OUT_OF_RANGE
    assert store.get('teams') == stored_before
    assert len(roster.list_teams()) == 1


def test_create_team_trims_values_and_assigns_member_ids(roster: RosterManager, students: list[dict]) -> None:
    padded = [{key: f'  {value}  ' for key, value in student.items()} for student in students[:2]]

    team = roster.create_team('  Rockets  ', padded)

    assert team.team_name == 'Rockets'
    assert team.members[0].full_name == 'Asha Rao'
    assert team.members[1].class_name == '9th'
    assert [member.id for member in team.members] == [f'{team.id}-0', f'{team.id}-1']


@pytest.mark.parametrize(
    ('team_name', 'member_count', 'blank_field', 'reason'),
    [
        ('   ', 1, 'fullName', TEAM_NAME_REQUIRED),
        ('Rockets', 1, 'school', MEMBER_FIELDS_REQUIRED),
        ('Rockets', 5, 'class', MEMBER_FIELDS_REQUIRED),
        ('Rockets', 5, None, MEMBER_COUNT_OUT_OF_RANGE),
    ],
)
def test_validation_reports_first_violated_rule(students: list[dict], team_name: str, member_count: int, blank_field: str | None, reason: str) -> None:
    members = [Student.model_validate(student) for student in students[:member_count]]
    if blank_field is not None:
        members[0] = Student.model_validate({**students[0], blank_field: '   '})

    with pytest.raises(ValidationFailed) as exception_info:
        validate_team(team_name, members)

    assert exception_info.value.reason == reason


def test_update_team_replaces_full_roster(roster: RosterManager, students: list[dict]) -> None:
    team = roster.create_team('Rockets', students[:3])

    updated = roster.update_team(team.id, 'Comets', [team.members[2], students[3]])

    assert updated.team_name == 'Comets'
    assert [member.full_name for member in updated.members] == ['Meena Shetty', 'Karthik N']
    assert updated.members[0].id == team.members[2].id
    assert updated.members[1].id
    assert roster.get_team(team.id) == updated


def test_update_team_checks_existence_before_validation(roster: RosterManager) -> None:
    with pytest.raises(NotFound):
        roster.update_team('missing', '', [])


def test_update_team_rejects_invalid_roster_without_writing(roster: RosterManager, store: KeyValueStore, students: list[dict]) -> None:
    team = roster.create_team('Rockets', students[:2])
    stored_before = store.get('teams')

    with pytest.raises(ValidationFailed) as exception_info:
        roster.update_team(team.id, 'Rockets', students[:1])

    assert exception_info.value.reason == MEMBER_COUNT_OUT_OF_RANGE
    assert store.get('teams') == stored_before


def test_add_member_until_full_then_fails(roster: RosterManager, students: list[dict]) -> None:
    team = roster.create_team('Rockets', students[:2])

    assert len(team.members) == 2
    assert len(roster.add_member(team.id).members) == 3
    assert len(roster.add_member(team.id).members) == 4

    with pytest.raises(MaxMembersReached):
        roster.add_member(team.id)

    assert len(roster.get_team(team.id).members) == 4


def test_add_member_appends_blank_draft_or_given_member(roster: RosterManager, students: list[dict]) -> None:
    team = roster.create_team('Rockets', students[:2])

    with_draft = roster.add_member(team.id)
    with_member = roster.add_member(team.id, students[4])

    assert with_draft.members[2].full_name == ''
    assert with_draft.members[2].id
    assert with_member.members[3].full_name == 'Divya P'


def test_add_member_to_missing_team_fails(roster: RosterManager) -> None:
    with pytest.raises(NotFound):
        roster.add_member('missing')


def test_remove_member_on_minimum_roster_fails(roster: RosterManager, students: list[dict]) -> None:
    team = roster.create_team('Rockets', students[:2])

    with pytest.raises(MinMembersRequired):
        roster.remove_member(team.id, 0)

    assert len(roster.get_team(team.id).members) == 2


def test_remove_member_drops_member_at_index(roster: RosterManager, students: list[dict]) -> None:
    team = roster.create_team('Rockets', students[:3])

    updated = roster.remove_member(team.id, 1)

    assert [member.full_name for member in updated.members] == ['Asha Rao', 'Meena Shetty']


def test_remove_member_rejects_out_of_range_index(roster: RosterManager, students: list[dict]) -> None:
    team = roster.create_team('Rockets', students[:3])

    with pytest.raises(ValidationFailed) as exception_info:
        roster.remove_member(team.id, 3)

    assert exception_info.value.reason == MEMBER_INDEX_OUT_OF_RANGE


def test_delete_team_persists_and_reports_existence(roster: RosterManager, store: KeyValueStore, students: list[dict]) -> None:
    team = roster.create_team('Rockets', students[:2])

    assert roster.delete_team(team.id) is True
    assert roster.delete_team(team.id) is False
    assert json.loads(store.get('teams')) == []


def test_editing_a_returned_team_never_reaches_the_store(roster: RosterManager, store: KeyValueStore, students: list[dict]) -> None:
    full = roster.create_team('Rockets', students[:4])
    other = roster.create_team('Comets', students[:2])

    roster.get_team(full.id).members.append(Student.model_validate(students[4]))
    roster.list_teams()[0].team_name = 'Renamed'
    roster.delete_team(other.id)

    stored = json.loads(store.get('teams'))
    assert [team['teamName'] for team in stored] == ['Rockets']
    assert len(stored[0]['members']) == 4
    assert len(roster.get_team(full.id).members) == 4
    with pytest.raises(MaxMembersReached):
        roster.add_member(full.id, students[4])
