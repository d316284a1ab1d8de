"""Persistence for users."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User


class UserRepository:
    """User lookups and creation over an ``AsyncSession``."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_email(self, email: str) -> User | None:
        """Exact, case-sensitive email match."""
        result = await self._session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: int) -> User | None:
        return await self._session.get(User, user_id)

    async def create(self, name: str, email: str, password_hash: str) -> User:
        """
        Insert and commit a new user.

        Raises:
            IntegrityError: If the email is already taken. The session is rolled back.
        """
        user = User(name=name, email=email, password_hash=password_hash)
        self._session.add(user)
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
        await self._session.refresh(user)
        return user
