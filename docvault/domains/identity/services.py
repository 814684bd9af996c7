import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession

from docvault.core.errors import ConflictError, NotFoundError, UnauthorizedError, ForbiddenError
from docvault.db.repositories.user_repository import UserRepository
from docvault.domains.identity.entities import User
from docvault.domains.identity.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class IdentityService:
    """User accounts: registration, lookups, profile changes and credential checks"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def create_user(self, user_data: UserCreate) -> User:
        """Register a new user; uniqueness is enforced by the store"""
        user = User.create_user(
            username=user_data.username,
            email=user_data.email,
            password=user_data.password,
            full_name=user_data.full_name,
            is_active=user_data.is_active,
            is_admin=user_data.is_admin
        )

        created = await self.user_repository.create(user)
        logger.info("Registered user %s (id=%s, admin=%s)", created.username, created.id, created.is_admin)
        return created

    async def get_user_by_id(self, user_id: int) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        return user

    async def get_user_by_username(self, username: str) -> User:
        user = await self.user_repository.get_by_username(username)
        if user is None:
            raise NotFoundError(f"User not found with username: {username}")
        return user

    async def get_user_by_email(self, email: str) -> User:
        user = await self.user_repository.get_by_email(email)
        if user is None:
            raise NotFoundError(f"User not found with email: {email}")
        return user

    async def list_users(self) -> List[User]:
        return await self.user_repository.get_all()

    async def update_user(self, user_id: int, update_data: UserUpdate) -> User:
        """Overwrite the fields present on the patch"""
        user = await self.get_user_by_id(user_id)

        if update_data.username is not None and update_data.username != user.username:
            if await self.username_exists(update_data.username):
                raise ConflictError("Username already taken")

        if update_data.email is not None and update_data.email != user.email:
            if await self.email_exists(update_data.email):
                raise ConflictError("Email already registered")

        user.update_profile(**update_data.changes())
        return await self._save(user)

    async def delete_user(self, user_id: int) -> None:
        """Delete a user and, with it, every document the user owns"""
        user = await self.get_user_by_id(user_id)
        await self.user_repository.delete(user.id)
        logger.info("Deleted user %s (id=%s) and owned documents", user.username, user.id)

    async def username_exists(self, username: str) -> bool:
        return await self.user_repository.username_exists(username)

    async def email_exists(self, email: str) -> bool:
        return await self.user_repository.email_exists(email)

    async def authenticate(self, username: Optional[str], password: Optional[str]) -> User:
        """Check user credentials; inactive accounts are refused"""
        user = await self.user_repository.get_by_username(username) if username else None

        if user is None or not user.authenticate(password):
            logger.warning("Failed login for username %r", username)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not user.is_active:
            logger.warning("Login refused for inactive user %s", user.username)
            raise ForbiddenError("Account is inactive. Please contact administrator.")

        return user

    async def authenticate_admin(self, username: Optional[str], password: Optional[str]) -> User:
        """Check credentials of an active administrator"""
        user = await self.user_repository.get_by_username(username) if username else None

        if user is None:
            logger.warning("Failed admin login for unknown username %r", username)
            raise UnauthorizedError("Invalid credentials")

        if not user.authenticate(password):
            logger.warning("Failed admin login for %s", user.username)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not (user.is_admin and user.is_active):
            logger.warning("Admin login refused for %s", user.username)
            raise UnauthorizedError("Unauthorized: Admin access required")

        return user

    async def toggle_active(self, user_id: int) -> User:
        user = await self.get_user_by_id(user_id)
        user.toggle_active()
        updated = await self._save(user)
        logger.info("User %s is_active -> %s", updated.id, updated.is_active)
        return updated

    async def toggle_admin(self, user_id: int) -> User:
        user = await self.get_user_by_id(user_id)
        user.toggle_admin()
        updated = await self._save(user)
        logger.info("User %s is_admin -> %s", updated.id, updated.is_admin)
        return updated

    async def get_stats(self) -> dict:
        total, active, admins = await self.user_repository.count_stats()
        return {
            "total_users": total,
            "active_users": active,
            "inactive_users": total - active,
            "admin_users": admins
        }

    async def _save(self, user: User) -> User:
        updated = await self.user_repository.update(user)
        if updated is None:
            raise NotFoundError(f"User not found with id: {user.id}")
        return updated
