from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import ClassVar, Optional, Tuple
from datetime import datetime


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PatchModel(CamelModel):
    """Partial update: only the fields the client sent are applied"""
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_null_for_required_columns(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} must not be null")
        return self

    def changes(self) -> dict:
        """Fields present on the request, explicit nulls included"""
        return self.model_dump(exclude_unset=True)


class UserCreate(CamelModel):
    """Registration payload"""
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    full_name: Optional[str] = Field(None, max_length=255)
    is_active: bool = True
    is_admin: bool = False


class UserUpdate(PatchModel):
    """Profile patch; only the supplied fields are written"""
    non_nullable: ClassVar[Tuple[str, ...]] = ("username", "email", "password", "is_active", "is_admin")

    username: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, min_length=1, max_length=255)
    password: Optional[str] = Field(None, min_length=1)
    full_name: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None
    is_admin: Optional[bool] = None


class UserLogin(BaseModel):
    """Missing fields fail as bad credentials, not as malformed input"""
    username: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    """User as returned to clients. Never carries the password hash."""
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    is_active: bool
    is_admin: bool
    registration_date: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            is_active=user.is_active,
            is_admin=user.is_admin,
            registration_date=user.created_at
        )


class UserRegistered(CamelModel):
    message: str
    user_id: int
    username: str


class UserMessageResponse(CamelModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


class UserStatsResponse(CamelModel):
    total_users: int
    active_users: int
    inactive_users: int
    admin_users: int
