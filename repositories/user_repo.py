import asyncio
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import DUMMY_PASSWORD_HASH, get_password_hash, verify_password
from core.enums import UserRole, UserStatus
from models.user import User
from repositories.base import BaseRepository
from schemas.validators import normalize_email


class UserRepository(BaseRepository[User]):
    """Repository for User operations (SRP - data access only)"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive; emails are stored lower-cased)"""
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        """Whether another account already uses this email"""
        query = select(User.id).where(User.email == normalize_email(email))
        if exclude_id:
            query = query.where(User.id != exclude_id)
        result = await self.db.execute(query)
        return result.first() is not None

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user by email and password.

        Returns User if credentials are valid and the account is active,
        None otherwise.
        """
        user = await self.get_by_email(email)

        if not user:
            # Perform dummy hash check to prevent timing attacks
            await asyncio.to_thread(verify_password, password, DUMMY_PASSWORD_HASH)
            return None

        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None

        if not user.is_active:
            return None

        return user

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: str = UserRole.STAFF.value,
        status: str = UserStatus.ACTIVE.value,
    ) -> User:
        """Create a new user with hashed password"""
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(
            name=name,
            email=normalize_email(email),
            hashed_password=hashed,
            role=role,
            status=status,
        )
        return await self.create(user)

    async def set_password(self, user: User, new_password: str) -> None:
        """Replace the stored hash; caller flushes via update()"""
        user.hashed_password = await asyncio.to_thread(get_password_hash, new_password)

