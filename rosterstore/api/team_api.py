from typing import Iterable

from rosterstore.core.errors import NotFound
from rosterstore.core.results import OperationResult, run_operation
from rosterstore.models.team import Student, Team
from rosterstore.teams.roster import RosterManager


async def list_teams(roster: RosterManager) -> OperationResult:
    return await run_operation(roster.list_teams)


async def get_team(roster: RosterManager, team_id: str) -> OperationResult:
    def find() -> Team:
        team = roster.get_team(team_id)
        if team is None:
            raise NotFound(f'No team with id {team_id!r}.')
        return team

    return await run_operation(find)


async def create_team(roster: RosterManager, team_name: str, members: Iterable[Student | dict]) -> OperationResult:
    return await run_operation(lambda: roster.create_team(team_name, members))


async def update_team(
    roster: RosterManager,
    team_id: str,
    team_name: str,
    members: Iterable[Student | dict],
) -> OperationResult:
    return await run_operation(lambda: roster.update_team(team_id, team_name, members))


async def add_member(roster: RosterManager, team_id: str, member: Student | dict | None = None) -> OperationResult:
    return await run_operation(lambda: roster.add_member(team_id, member))


async def remove_member(roster: RosterManager, team_id: str, member_index: int) -> OperationResult:
    return await run_operation(lambda: roster.remove_member(team_id, member_index))


async def delete_team(roster: RosterManager, team_id: str) -> OperationResult:
    return await run_operation(lambda: roster.delete_team(team_id))
