from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from user_registry.config import settings
from user_registry.dependencies import get_user_service
from user_registry.schemas import (
    MessageResponse,
    TokenResponse,
    UserCreate,
    UserResponse,
)
from user_registry.security import create_access_token, guard_writes
from user_registry.services.results import ServiceResult
from user_registry.services.user_service import UserService

router = APIRouter(prefix="/user", tags=["users"])

_MESSAGE = {"model": MessageResponse}


def _serialize(data):
    if isinstance(data, list):
        return [UserResponse.model_validate(u).model_dump(mode="json") for u in data]
    return UserResponse.model_validate(data).model_dump(mode="json")


def to_response(result: ServiceResult) -> JSONResponse:
    """
    Status is always ``result.code``.  Data payloads go out as-is; every
    message-only outcome is wrapped as ``{"msg": ...}``.
    """
    if result.has_data:
        content = _serialize(result.payload)
    else:
        content = {"msg": result.payload}
    return JSONResponse(status_code=result.code, content=content)


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    return to_response(await service.find_all())


@router.get("/{user_id}", response_model=UserResponse, responses={404: _MESSAGE})
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return to_response(await service.find_by_id(user_id))


@router.post(
    "",
    status_code=201,
    response_model=MessageResponse,
    responses={409: _MESSAGE},
    dependencies=[Depends(guard_writes)],
)
async def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    return to_response(await service.insert(data))


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={404: _MESSAGE},
    dependencies=[Depends(guard_writes)],
)
async def remove_user(user_id: int, service: UserService = Depends(get_user_service)):
    return to_response(await service.remove(user_id))


@router.post("/{user_id}/token", response_model=TokenResponse, responses={404: _MESSAGE})
async def issue_token(user_id: int, service: UserService = Depends(get_user_service)):
    result = await service.find_by_id(user_id)
    if not result.ok:
        return to_response(result)
    return TokenResponse(
        token=create_access_token(user_id),
        expires_in=settings.TOKEN_EXPIRE_SECONDS,
    )
