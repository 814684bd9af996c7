from docvault.db.base import Base
from docvault.db.models.user import User
from docvault.db.models.document import Document

__all__ = [
    "Base",
    "User",
    "Document",
]
