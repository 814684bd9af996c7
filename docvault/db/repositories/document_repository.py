from typing import Optional, List, Tuple, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func

from docvault.db.models.document import Document as DocumentModel

if TYPE_CHECKING:
    from docvault.domains.documents.entities import Document


class DocumentRepository:
    """Data access for documents. Row reads never load ``file_data``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: "Document") -> "Document":
        """Insert a document including its content"""
        db_document = DocumentModel(
            file_name=document.file_name,
            file_type=document.file_type,
            file_size=document.file_size,
            file_data=document.file_data,
            category=document.category,
            description=document.description,
            owner_id=document.owner_id
        )

        self.session.add(db_document)
        await self.session.commit()
        await self.session.refresh(db_document)
        return self._to_domain(db_document)

    async def get_by_id(self, document_id: int) -> Optional["Document"]:
        db_document = await self._get_model(document_id)
        return self._to_domain(db_document) if db_document else None

    async def get_all(self) -> List["Document"]:
        result = await self.session.execute(select(DocumentModel).order_by(DocumentModel.id))
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def get_by_owner(self, owner_id: int) -> List["Document"]:
        """Documents of one owner in insertion order"""
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.id)
        )
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def get_by_owner_and_category(self, owner_id: int, category: str) -> List["Document"]:
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.owner_id == owner_id, DocumentModel.category == category)
            .order_by(DocumentModel.id)
        )
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def search_by_file_name(self, owner_id: int, fragment: str) -> List["Document"]:
        """Owner's documents whose file name contains ``fragment``"""
        result = await self.session.execute(
            select(DocumentModel)
            .where(
                DocumentModel.owner_id == owner_id,
                DocumentModel.file_name.contains(fragment, autoescape=True)
            )
            .order_by(DocumentModel.id)
        )
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def get_file_data(self, document_id: int) -> Optional[bytes]:
        result = await self.session.execute(
            select(DocumentModel.file_data).where(DocumentModel.id == document_id)
        )
        return result.scalar_one_or_none()

    async def update(self, document: "Document") -> Optional["Document"]:
        """Save metadata of an existing document; content stays as stored"""
        db_document = await self._get_model(document.id)
        if db_document is None:
            return None

        db_document.file_name = document.file_name
        db_document.category = document.category
        db_document.description = document.description

        await self.session.commit()
        await self.session.refresh(db_document)
        return self._to_domain(db_document)

    async def delete(self, document_id: int) -> bool:
        stmt = delete(DocumentModel).where(DocumentModel.id == document_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def get_stats(self) -> Tuple[int, int]:
        """Return (document count, total stored bytes)"""
        result = await self.session.execute(
            select(
                func.count(DocumentModel.id),
                func.coalesce(func.sum(func.length(DocumentModel.file_data)), 0),
            )
        )
        count, total_size = result.one()
        return int(count), int(total_size)

    async def _get_model(self, document_id: int) -> Optional[DocumentModel]:
        result = await self.session.execute(
            select(DocumentModel).where(DocumentModel.id == document_id)
        )
        return result.scalar_one_or_none()

    def _to_domain(self, db_document: DocumentModel) -> "Document":
        """Map a database row to the domain entity"""
        from docvault.domains.documents.entities import Document

        return Document(
            id=db_document.id,
            file_name=db_document.file_name,
            file_type=db_document.file_type,
            file_size=db_document.file_size,
            category=db_document.category,
            owner_id=db_document.owner_id,
            description=db_document.description,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )
