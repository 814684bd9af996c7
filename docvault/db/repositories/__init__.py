from docvault.db.repositories.user_repository import UserRepository
from docvault.db.repositories.document_repository import DocumentRepository

__all__ = [
    "UserRepository",
    "DocumentRepository",
]
