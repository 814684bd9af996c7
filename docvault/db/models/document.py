from sqlalchemy import Column, String, Text, Integer, BigInteger, LargeBinary, ForeignKey
from sqlalchemy.orm import deferred, relationship

from docvault.db.base import BaseModel


class Document(BaseModel):
    __tablename__ = "documents"

    file_name = Column(String(255), nullable=False)
    file_type = Column(String(255), nullable=True)
    file_size = Column(BigInteger, nullable=False, default=0)
    # Stored inline, never loaded by listing queries
    file_data = deferred(Column(LargeBinary, nullable=False))
    category = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    owner = relationship("User", back_populates="documents")
