"""
Result descriptors returned by the service layer.

Every service call answers with one of these instead of raising for an
expected business condition.  Each carries the ``code`` / ``payload``
pair the router turns into an HTTP response; ``has_data`` tells whether
``payload`` is a record (sent as-is) or a message (sent as ``{"msg": ...}``).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Literal

USER_NOT_FOUND = "User not found"
USER_CREATED = "User create with successful"
USER_REMOVED = "User removed with successful"


class ServiceResult(ABC):
    code: ClassVar[int]
    has_data: ClassVar[bool] = False

    @property
    @abstractmethod
    def payload(self) -> Any:
        ...

    @property
    def ok(self) -> bool:
        return self.code < 400


@dataclass(frozen=True)
class Found(ServiceResult):
    data: Any
    code: ClassVar[int] = 200
    has_data: ClassVar[bool] = True

    @property
    def payload(self) -> Any:
        return self.data


@dataclass(frozen=True)
class Created(ServiceResult):
    # The generated id stays on the result object; it is never sent back.
    user_id: int
    code: ClassVar[int] = 201

    @property
    def payload(self) -> str:
        return USER_CREATED


@dataclass(frozen=True)
class Removed(ServiceResult):
    code: ClassVar[int] = 200

    @property
    def payload(self) -> str:
        return USER_REMOVED


@dataclass(frozen=True)
class NotFound(ServiceResult):
    code: ClassVar[int] = 404

    @property
    def payload(self) -> str:
        return USER_NOT_FOUND


@dataclass(frozen=True)
class Conflict(ServiceResult):
    field: Literal["cpf", "email"]
    code: ClassVar[int] = 409

    @property
    def payload(self) -> str:
        return f"{self.field.capitalize()} already exists"
