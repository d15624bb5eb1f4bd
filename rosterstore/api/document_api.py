from typing import Iterable

from rosterstore.core.results import OperationResult, run_operation
from rosterstore.core.timestamps import utc_timestamp
from rosterstore.models.document import Document, DocumentUpload
from rosterstore.storage.repository import Repository


async def list_documents(repository: Repository) -> OperationResult:
    return await run_operation(repository.documents.list)


async def add_documents(repository: Repository, uploads: Iterable[DocumentUpload | dict]) -> OperationResult:
    def add() -> list[Document]:
        files = [
            upload if isinstance(upload, DocumentUpload) else DocumentUpload.model_validate(upload)
            for upload in uploads
        ]
        if not files:
            return []

        upload_date = utc_timestamp()
        return repository.documents.add_many(
            Document(id=repository.id_generator.next_id(), upload_date=upload_date, **upload.model_dump())
            for upload in files
        )

    return await run_operation(add)


async def delete_document(repository: Repository, document_id: str) -> OperationResult:
    return await run_operation(lambda: repository.documents.remove(document_id))
