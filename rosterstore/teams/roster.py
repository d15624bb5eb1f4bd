import logging
from typing import Iterable

from pydantic import ValidationError

from rosterstore.core import config
from rosterstore.core.errors import MaxMembersReached, MinMembersRequired, NotFound, ValidationFailed
from rosterstore.core.ids import member_id
from rosterstore.models.team import Student, Team, TeamPatch
from rosterstore.storage.repository import Repository

logger = logging.getLogger(__name__)

TEAM_NAME_REQUIRED = 'team_name_required'
MEMBER_FIELDS_REQUIRED = 'member_fields_required'
MEMBER_COUNT_OUT_OF_RANGE = 'member_count_out_of_range'
MEMBER_INDEX_OUT_OF_RANGE = 'member_index_out_of_range'


def coerce_members(members: Iterable[Student | dict]) -> list[Student]:
    try:
        return [member if isinstance(member, Student) else Student.model_validate(member) for member in members]
    except ValidationError as exc:
        raise ValidationFailed.from_pydantic(exc) from exc


def validate_team(team_name: str, members: list[Student]) -> None:
    """Check a full team against the roster rules, reporting the first violation only."""
    if not team_name.strip():
        raise ValidationFailed('Team name is required.', field='teamName', reason=TEAM_NAME_REQUIRED)

    if not all(member.is_complete() for member in members):
        raise ValidationFailed(
            'Every member needs a full name, class, place and school.',
            field='members',
            reason=MEMBER_FIELDS_REQUIRED,
        )

    if not config.TEAM_MIN_MEMBERS <= len(members) <= config.TEAM_MAX_MEMBERS:
        raise ValidationFailed(
            f'A team must have between {config.TEAM_MIN_MEMBERS} and {config.TEAM_MAX_MEMBERS} members.',
            field='members',
            reason=MEMBER_COUNT_OUT_OF_RANGE,
        )


class RosterManager:
    """Team operations that keep every roster within the membership rules."""

    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    @property
    def teams(self):
        return self.repository.teams

    def list_teams(self) -> list[Team]:
        return self.teams.list()

    def get_team(self, team_id: str) -> Team | None:
        return self.teams.find_by_id(team_id)

    def create_team(self, team_name: str, members: Iterable[Student | dict]) -> Team:
        roster = coerce_members(members)
        validate_team(team_name, roster)

        team_id = self.repository.id_generator.next_id()
        team = Team(
            id=team_id,
            team_name=team_name.strip(),
            members=[
                member.trimmed().model_copy(update={'id': member_id(team_id, index)})
                for index, member in enumerate(roster)
            ],
        )
        created = self.teams.add(team)
        logger.info('Created team %r with %d members.', created.id, len(created.members))
        return created

    def update_team(self, team_id: str, team_name: str, members: Iterable[Student | dict]) -> Team:
        if self.get_team(team_id) is None:
            raise NotFound(f'No team with id {team_id!r}.')

        roster = coerce_members(members)
        validate_team(team_name, roster)

        base_id = self.repository.id_generator.next_id()
        new_members = [
            member.trimmed().model_copy(update={'id': member.id or member_id(base_id, index)})
            for index, member in enumerate(roster)
        ]
        return self.teams.update(team_id, TeamPatch(team_name=team_name.strip(), members=new_members))

    def add_member(self, team_id: str, member: Student | dict | None = None) -> Team:
        """Append a member, or a blank draft member to be filled in before the next update."""
        team = self._require_team(team_id)
        if len(team.members) >= config.TEAM_MAX_MEMBERS:
            raise MaxMembersReached(f'A team can have at most {config.TEAM_MAX_MEMBERS} members.')

        new_member = coerce_members([member])[0].trimmed() if member is not None else Student()
        if not new_member.id:
            new_member = new_member.model_copy(
                update={'id': member_id(self.repository.id_generator.next_id(), len(team.members))}
            )
        return self.teams.replace(team.model_copy(update={'members': [*team.members, new_member]}))

    def remove_member(self, team_id: str, member_index: int) -> Team:
        team = self._require_team(team_id)
        if len(team.members) <= config.TEAM_MIN_MEMBERS:
            raise MinMembersRequired(f'A team must have at least {config.TEAM_MIN_MEMBERS} members.')

        if not 0 <= member_index < len(team.members):
            raise ValidationFailed(
                f'No member at position {member_index}.',
                field='memberIndex',
                reason=MEMBER_INDEX_OUT_OF_RANGE,
            )

        remaining = [member for index, member in enumerate(team.members) if index != member_index]
        return self.teams.replace(team.model_copy(update={'members': remaining}))

    def delete_team(self, team_id: str) -> bool:
        return self.teams.remove(team_id)

    def _require_team(self, team_id: str) -> Team:
        team = self.get_team(team_id)
        if team is None:
            raise NotFound(f'No team with id {team_id!r}.')
        return team
