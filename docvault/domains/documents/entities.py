from datetime import datetime
from typing import Optional

METADATA_FIELDS = frozenset({"file_name", "category", "description"})


class Document:
    """Stored file plus its metadata. ``file_data`` is only populated on upload."""

    def __init__(
        self,
        id: Optional[int],
        file_name: str,
        file_type: Optional[str],
        file_size: int,
        category: str,
        owner_id: int,
        description: Optional[str] = None,
        file_data: Optional[bytes] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.file_name = file_name
        self.file_type = file_type
        self.file_size = file_size
        self.category = category
        self.owner_id = owner_id
        self.description = description
        self.file_data = file_data
        self.created_at = created_at
        self.updated_at = updated_at

    def update_metadata(self, **changes) -> None:
        """Overwrite the metadata fields passed in; file content is never touched"""
        unknown = set(changes) - METADATA_FIELDS
        if unknown:
            raise TypeError(f"Unknown metadata fields: {sorted(unknown)}")

        for field, value in changes.items():
            setattr(self, field, value)

    @classmethod
    def create_document(
        cls,
        file_name: str,
        file_type: Optional[str],
        file_size: int,
        file_data: bytes,
        owner_id: int,
        category: str,
        description: Optional[str] = None
    ) -> "Document":
        return cls(
            id=None,
            file_name=file_name,
            file_type=file_type,
            file_size=file_size,
            category=category,
            owner_id=owner_id,
            description=description,
            file_data=file_data
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id is not None and self.id == other.id

    def __repr__(self) -> str:
        return f"Document(id={self.id}, file_name={self.file_name}, owner_id={self.owner_id})"
