import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession

from docvault.core.errors import BadInputError, NotFoundError
from docvault.db.repositories.document_repository import DocumentRepository
from docvault.db.repositories.user_repository import UserRepository
from docvault.domains.documents.entities import Document
from docvault.domains.documents.schemas import FILE_NAME_MAX_LENGTH, DocumentUpdate

logger = logging.getLogger(__name__)


class DocumentService:
    """Service for stored documents"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)
        self.user_repository = UserRepository(session)

    async def upload_document(
        self,
        file_data: bytes,
        file_name: str,
        content_type: Optional[str],
        file_size: int,
        user_id: int,
        category: str,
        description: Optional[str] = None
    ) -> Document:
        """Store an uploaded file for an existing user"""
        if not file_name:
            raise BadInputError("File name is required")
        if len(file_name) > FILE_NAME_MAX_LENGTH:
            raise BadInputError(f"File name must be at most {FILE_NAME_MAX_LENGTH} characters")

        owner = await self.user_repository.get_by_id(user_id)
        if owner is None:
            raise NotFoundError(f"User not found with id: {user_id}")

        document = Document.create_document(
            file_name=file_name,
            file_type=content_type,
            file_size=file_size,
            file_data=file_data,
            owner_id=owner.id,
            category=category,
            description=description
        )

        created = await self.document_repository.create(document)
        logger.info(
            "Stored document %s (%s, %d bytes) for user %s",
            created.id, created.file_name, created.file_size, owner.id
        )
        return created

    async def get_document(self, document_id: int) -> Document:
        document = await self.document_repository.get_by_id(document_id)
        if document is None:
            raise NotFoundError(f"Document not found with id: {document_id}")
        return document

    async def list_documents(self) -> List[Document]:
        return await self.document_repository.get_all()

    async def get_user_documents(self, user_id: int) -> List[Document]:
        return await self.document_repository.get_by_owner(user_id)

    async def get_documents_by_category(self, user_id: int, category: str) -> List[Document]:
        return await self.document_repository.get_by_owner_and_category(user_id, category)

    async def search_documents(self, user_id: int, file_name: str) -> List[Document]:
        return await self.document_repository.search_by_file_name(user_id, file_name)

    async def delete_document(self, document_id: int) -> None:
        """Delete by id; ownership is not checked"""
        document = await self.get_document(document_id)
        await self.document_repository.delete(document.id)
        logger.info("Deleted document %s (%s)", document.id, document.file_name)

    async def download_document(self, document_id: int) -> bytes:
        file_data = await self.document_repository.get_file_data(document_id)
        if file_data is None:
            raise NotFoundError(f"Document not found with id: {document_id}")
        return file_data

    async def update_document(self, document_id: int, update_data: DocumentUpdate) -> Document:
        """Overwrite file name, category and description when supplied"""
        document = await self.get_document(document_id)
        document.update_metadata(**update_data.changes())

        updated = await self.document_repository.update(document)
        if updated is None:
            raise NotFoundError(f"Document not found with id: {document_id}")
        return updated

    async def get_stats(self) -> dict:
        total_documents, total_size = await self.document_repository.get_stats()
        return {
            "total_documents": total_documents,
            "total_size": total_size
        }
