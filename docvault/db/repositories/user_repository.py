from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError

from docvault.core.errors import ConflictError
from docvault.db.models.user import User as UserModel
from docvault.db.models.document import Document as DocumentModel
from docvault.domains.identity.entities import User


class UserRepository:
    """Data access for users"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Insert a new user"""
        db_user = self._to_model(user)

        self.session.add(db_user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("User with this username or email already exists")
        await self.session.refresh(db_user)
        return self._to_domain(db_user)

    async def get_by_id(self, user_id: int) -> Optional[User]:
        db_user = await self._get_model(user_id)
        return self._to_domain(db_user) if db_user else None

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_all(self) -> List[User]:
        result = await self.session.execute(select(UserModel).order_by(UserModel.id))
        return [self._to_domain(user) for user in result.scalars().all()]

    async def update(self, user: User) -> Optional[User]:
        """Save every mutable field of an existing user"""
        db_user = await self._get_model(user.id)
        if db_user is None:
            return None

        db_user.username = user.username
        db_user.email = user.email
        db_user.password_hash = user.password_hash
        db_user.full_name = user.full_name
        db_user.is_active = user.is_active
        db_user.is_admin = user.is_admin

        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("User with this username or email already exists")
        await self.session.refresh(db_user)
        return self._to_domain(db_user)

    async def delete(self, user_id: int) -> bool:
        """Delete a user together with the documents it owns"""
        await self.session.execute(delete(DocumentModel).where(DocumentModel.owner_id == user_id))
        result = await self.session.execute(delete(UserModel).where(UserModel.id == user_id))
        await self.session.commit()
        return result.rowcount > 0

    async def username_exists(self, username: str) -> bool:
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.username == username)
        )
        return result.scalar_one_or_none() is not None

    async def email_exists(self, email: str) -> bool:
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email)
        )
        return result.scalar_one_or_none() is not None

    async def count_stats(self) -> Tuple[int, int, int]:
        """Return (total, active, admin) user counts"""
        result = await self.session.execute(
            select(
                func.count(UserModel.id),
                func.count(UserModel.id).filter(UserModel.is_active.is_(True)),
                func.count(UserModel.id).filter(UserModel.is_admin.is_(True)),
            )
        )
        total, active, admins = result.one()
        return int(total), int(active), int(admins)

    async def _get_model(self, user_id: int) -> Optional[UserModel]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    def _to_domain(self, db_user: UserModel) -> User:
        """Map a database row to the domain entity"""
        return User(
            id=db_user.id,
            username=db_user.username,
            email=db_user.email,
            password_hash=db_user.password_hash,
            full_name=db_user.full_name,
            is_active=db_user.is_active,
            is_admin=db_user.is_admin,
            created_at=db_user.created_at,
            updated_at=db_user.updated_at
        )

    def _to_model(self, user: User) -> UserModel:
        return UserModel(
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            full_name=user.full_name,
            is_active=user.is_active,
            is_admin=user.is_admin
        )
