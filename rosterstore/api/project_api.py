from typing import Iterable

from rosterstore.core.results import OperationResult, run_operation
from rosterstore.core.timestamps import utc_timestamp
from rosterstore.models.project import ProjectDetails, ProjectDetailsRequest
from rosterstore.storage.repository import Repository


async def get_project_details(repository: Repository) -> OperationResult:
    return await run_operation(repository.project_details.get)


async def save_project_details(repository: Repository, data: ProjectDetailsRequest | dict) -> OperationResult:
    def save() -> ProjectDetails:
        request = data if isinstance(data, ProjectDetailsRequest) else ProjectDetailsRequest.model_validate(data)
        return repository.project_details.set(ProjectDetails(**request.model_dump(), updated_at=utc_timestamp()))

    return await run_operation(save)


async def list_project_files(repository: Repository) -> OperationResult:
    return await run_operation(repository.project_files.list)


async def add_project_files(repository: Repository, file_names: Iterable[str]) -> OperationResult:
    return await run_operation(lambda: repository.project_files.add(file_names))


async def remove_project_file(repository: Repository, file_name: str) -> OperationResult:
    return await run_operation(lambda: repository.project_files.remove(file_name))
