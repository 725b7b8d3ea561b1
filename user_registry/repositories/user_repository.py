"""
User repository — data access for the ``users`` table.

``UserStore`` is the contract the service layer depends on;
``UserRepository`` fulfils it over an ``AsyncSession``.  Any other object
with the same coroutine methods (an in-memory store in tests, for
instance) can be injected into ``UserService`` instead.
"""
from typing import Protocol, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from user_registry.models import User
from user_registry.schemas import UserCreate

# Ids are 32-bit INTEGER keys; anything outside cannot match a row and
# would be rejected by the driver before reaching the database.
_MAX_ID = 2**31 - 1


def _valid_id(user_id: int) -> bool:
    return 1 <= user_id <= _MAX_ID


class UserStore(Protocol):
    async def find_all(self) -> Sequence[User]: ...

    async def find_by_id(self, user_id: int) -> User | None: ...

    async def find_by_cpf(self, cpf: str) -> User | None: ...

    async def find_by_email(self, email: str) -> User | None: ...

    async def insert(self, data: UserCreate) -> int: ...

    async def remove(self, user_id: int) -> int: ...


class UserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_all(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def find_by_id(self, user_id: int) -> User | None:
        if not _valid_id(user_id):
            return None
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_cpf(self, cpf: str) -> User | None:
        result = await self.session.execute(select(User).where(User.cpf == cpf))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def insert(self, data: UserCreate) -> int:
        """
        Stage a new row and flush so the database assigns its id.

        A unique-constraint violation surfaces here as ``IntegrityError``.
        """
        user = User(
            name=data.name,
            cpf=data.cpf,
            email=data.email,
            phone=data.phone,
        )
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user.id

    async def remove(self, user_id: int) -> int:
        """Delete by primary key and return the affected row count."""
        if not _valid_id(user_id):
            return 0
        result = await self.session.execute(delete(User).where(User.id == user_id))
        return result.rowcount
