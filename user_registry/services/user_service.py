"""
User service — business rules for the User aggregate.

The repository is injected so the rules can run against any
``UserStore``.  Every public method returns a ``ServiceResult``; expected
outcomes (missing user, duplicate CPF or email) are values, not
exceptions.  Errors raised by the repository are not caught here and
reach the caller unchanged.

Nothing is cached between calls: each method re-reads through the
repository.
"""
import logging

from user_registry.repositories.user_repository import UserStore
from user_registry.schemas import UserCreate
from user_registry.services.results import (
    Conflict,
    Created,
    Found,
    NotFound,
    Removed,
    ServiceResult,
)

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repo: UserStore) -> None:
        self.repo = repo

    async def find_all(self) -> ServiceResult:
        users = await self.repo.find_all()
        return Found(list(users))

    async def find_by_id(self, user_id: int) -> ServiceResult:
        user = await self.repo.find_by_id(user_id)
        if user is None:
            return NotFound()
        return Found(user)

    async def insert(self, candidate: UserCreate) -> ServiceResult:
        """
        Create a user once both uniqueness checks pass.

        CPF is always checked first and short-circuits, so a candidate
        colliding on both fields reports the CPF conflict.  The checks and
        the write are separate round trips; the unique constraints on the
        table reject a duplicate that slips in between.
        """
        if await self.repo.find_by_cpf(candidate.cpf) is not None:
            logger.info("Rejected user insert: cpf already registered")
            return Conflict("cpf")

        if await self.repo.find_by_email(candidate.email) is not None:
            logger.info("Rejected user insert: email already registered")
            return Conflict("email")

        user_id = await self.repo.insert(candidate)
        logger.info("Created user id=%s", user_id)
        return Created(user_id)

    async def remove(self, user_id: int) -> ServiceResult:
        if await self.repo.find_by_id(user_id) is None:
            logger.info("Remove skipped: user id=%s not found", user_id)
            return NotFound()

        affected = await self.repo.remove(user_id)
        logger.info("Removed user id=%s (%d row(s))", user_id, affected)
        return Removed()
