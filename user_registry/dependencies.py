from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from user_registry.database import get_db
from user_registry.repositories.user_repository import UserRepository
from user_registry.services.user_service import UserService


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """
    Build a ``UserService`` bound to the request-scoped session.

    Usage in a router::

        @router.get("/user")
        async def list_users(service: UserService = Depends(get_user_service)):
            ...

    Tests may override this dependency to inject a service backed by a
    different ``UserStore``.
    """
    return UserService(UserRepository(db))
