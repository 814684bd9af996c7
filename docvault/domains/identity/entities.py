from datetime import datetime
from typing import Optional

from docvault.core.security import get_password_hash, verify_password

PROFILE_FIELDS = frozenset({"username", "email", "password", "full_name", "is_active", "is_admin"})


class User:
    """User entity of the identity domain"""

    def __init__(
        self,
        id: Optional[int],
        username: str,
        email: str,
        password_hash: str,
        full_name: Optional[str] = None,
        is_active: bool = True,
        is_admin: bool = False,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.username = username
        self.email = email
        self.password_hash = password_hash
        self.full_name = full_name
        self.is_active = is_active
        self.is_admin = is_admin
        self.created_at = created_at
        self.updated_at = updated_at

    def authenticate(self, password: str) -> bool:
        """Check the password against the stored hash"""
        if password is None:
            return False
        return verify_password(password, self.password_hash)

    def set_password(self, password: str) -> None:
        self.password_hash = get_password_hash(password)

    def update_profile(self, **changes) -> None:
        """
        Overwrite every field passed in, ``None`` included.
        A new password is hashed before it is stored.
        """
        unknown = set(changes) - PROFILE_FIELDS
        if unknown:
            raise TypeError(f"Unknown profile fields: {sorted(unknown)}")

        password = changes.pop("password", None)
        for field, value in changes.items():
            setattr(self, field, value)
        if password is not None:
            self.set_password(password)

    def toggle_active(self) -> None:
        self.is_active = not self.is_active

    def toggle_admin(self) -> None:
        self.is_admin = not self.is_admin

    @classmethod
    def create_user(
        cls,
        username: str,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        is_active: bool = True,
        is_admin: bool = False
    ) -> "User":
        """Build a new, not yet persisted user with a hashed password"""
        return cls(
            id=None,
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            full_name=full_name,
            is_active=is_active,
            is_admin=is_admin
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id is not None and self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username}, email={self.email})"
