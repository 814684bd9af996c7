from docvault.domains.documents.entities import Document
from docvault.domains.documents.schemas import (
    DocumentUpdate, DocumentResponse, DocumentStatsResponse
)

__all__ = [
    "Document",
    "DocumentUpdate", "DocumentResponse", "DocumentStatsResponse"
]
