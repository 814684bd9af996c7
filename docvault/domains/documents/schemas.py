from pydantic import Field
from typing import ClassVar, Optional, Tuple
from datetime import datetime

from docvault.domains.identity.schemas import CamelModel, PatchModel

# Column widths of documents.file_name and documents.category
FILE_NAME_MAX_LENGTH = 255
CATEGORY_MAX_LENGTH = 100


class DocumentUpdate(PatchModel):
    """Metadata patch for a document"""
    non_nullable: ClassVar[Tuple[str, ...]] = ("file_name", "category")

    file_name: Optional[str] = Field(None, min_length=1, max_length=FILE_NAME_MAX_LENGTH)
    category: Optional[str] = Field(None, min_length=1, max_length=CATEGORY_MAX_LENGTH)
    description: Optional[str] = None


class DocumentResponse(CamelModel):
    """Document metadata; content is served by the download endpoint"""
    id: int
    file_name: str
    file_type: Optional[str] = None
    file_size: int
    category: str
    description: Optional[str] = None
    user_id: int
    upload_date: Optional[datetime] = None

    @classmethod
    def from_entity(cls, document) -> "DocumentResponse":
        return cls(
            id=document.id,
            file_name=document.file_name,
            file_type=document.file_type,
            file_size=document.file_size,
            category=document.category,
            description=document.description,
            user_id=document.owner_id,
            upload_date=document.created_at
        )


class DocumentStatsResponse(CamelModel):
    total_documents: int
    total_size: int
