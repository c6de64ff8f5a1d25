from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.deps import get_user_repo, get_user_repo_transactional, require_admin
from core.exceptions import DuplicateEmailError, ResourceNotFoundError
from repositories.user_repo import UserRepository
from schemas.user import UserCreate, UserResponse, UserUpdate

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/", response_model=list[UserResponse])
async def list_users(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List all accounts, newest first"""
    return await user_repo.get_all(skip, limit)


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    user_repo: Annotated[UserRepository, Depends(get_user_repo_transactional)],
):
    """Create a Staff or Admin account"""
    if await user_repo.email_taken(data.email):
        raise DuplicateEmailError(data.email)

    return await user_repo.create_user(
        name=data.name,
        email=data.email,
        password=data.password,
        role=data.role.value,
        status=data.status.value,
    )


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    user_repo: Annotated[UserRepository, Depends(get_user_repo_transactional)],
):
    """Update an account; the password is re-hashed only when a non-blank one is sent"""
    user = await user_repo.get_by_id(user_id)
    if not user:
        raise ResourceNotFoundError("User", user_id)

    if data.email is not None:
        if await user_repo.email_taken(data.email, exclude_id=user.id):
            raise DuplicateEmailError(data.email)
        user.email = data.email.lower()
    if data.name is not None:
        user.name = data.name
    if data.role is not None:
        user.role = data.role.value
    if data.status is not None:
        user.status = data.status.value
    if data.password and data.password.strip():
        await user_repo.set_password(user, data.password)

    return await user_repo.update(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    user_repo: Annotated[UserRepository, Depends(get_user_repo_transactional)],
):
    user = await user_repo.get_by_id(user_id)
    if not user:
        raise ResourceNotFoundError("User", user_id)
    await user_repo.delete(user)
