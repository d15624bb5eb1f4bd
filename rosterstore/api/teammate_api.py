from rosterstore.auth.session import LeaderSession
from rosterstore.core.errors import NotFound
from rosterstore.core.results import OperationResult, run_operation
from rosterstore.core.timestamps import utc_timestamp
from rosterstore.models.teammate import Teammate, TeammatePatch, TeammateRequest
from rosterstore.storage.repository import Repository


def with_leader_organization(data: TeammateRequest | dict, session: LeaderSession | None) -> TeammateRequest | dict:
    if isinstance(data, TeammateRequest) or session is None or session.user is None:
        return data
    if str(data.get('organization') or '').strip():
        return data
    return {**data, 'organization': session.user.organization}


async def list_teammates(repository: Repository) -> OperationResult:
    return await run_operation(repository.teammates.list)


async def add_teammate(
    repository: Repository,
    data: TeammateRequest | dict,
    session: LeaderSession | None = None,
) -> OperationResult:
    def add() -> Teammate:
        request = TeammateRequest.model_validate(with_leader_organization(data, session))
        return repository.teammates.add(Teammate(**request.model_dump(), added_date=utc_timestamp()))

    return await run_operation(add)


async def update_teammate(repository: Repository, teammate_id: str, patch: TeammatePatch | dict) -> OperationResult:
    def update() -> Teammate:
        current = repository.teammates.find_by_id(teammate_id)
        if current is None:
            raise NotFound(f'No teammate with id {teammate_id!r}.')

        changes = patch if isinstance(patch, TeammatePatch) else TeammatePatch.model_validate(patch)
        merged = {**current.model_dump(exclude={'id', 'added_date'}), **changes.model_dump(exclude_none=True)}
        request = TeammateRequest.model_validate(merged)
        return repository.teammates.update(teammate_id, TeammatePatch(**request.model_dump()))

    return await run_operation(update)


async def delete_teammate(repository: Repository, teammate_id: str) -> OperationResult:
    return await run_operation(lambda: repository.teammates.remove(teammate_id))
