from docvault.domains.identity.entities import User
from docvault.domains.identity.schemas import (
    UserCreate, UserUpdate, UserLogin, UserResponse, UserRegistered,
    UserMessageResponse, MessageResponse, UserStatsResponse
)

__all__ = [
    "User",
    "UserCreate", "UserUpdate", "UserLogin", "UserResponse", "UserRegistered",
    "UserMessageResponse", "MessageResponse", "UserStatsResponse"
]
