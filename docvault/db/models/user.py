from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship

from docvault.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    # Relationships
    documents = relationship(
        "Document", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
