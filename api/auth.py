from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.deps import get_current_user, get_user_repo, get_user_repo_transactional
from core.auth import create_user_token
from core.config import get_settings
from core.exceptions import DuplicateEmailError
from core.logging import get_logger
from core.rate_limit import limiter
from repositories.user_repo import UserRepository
from schemas.token import AuthResponse, LoginRequest, TokenPayload
from schemas.user import RegisterRequest, UserResponse

router = APIRouter()
settings = get_settings()
logger = get_logger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo_transactional)],
):
    """Create a Staff account and sign it in"""
    if await user_repo.email_taken(data.email):
        raise DuplicateEmailError(data.email)

    user = await user_repo.create_user(
        name=data.name, email=data.email, password=data.password
    )
    return AuthResponse(
        access_token=create_user_token(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,  # Required by slowapi for rate limiting (extracts remote address)
    credentials: LoginRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
):
    """
    Exchange email and password for a JWT access token.

    Token contains:
    - sub: user id
    - email, role
    - exp: expiration timestamp
    """
    user = await user_repo.authenticate(credentials.email, credentials.password)
    if not user:
        logger.info("Failed login for %s", credentials.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthResponse(
        access_token=create_user_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def me(
    current_user: Annotated[TokenPayload, Depends(get_current_user)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
):
    """Get current authenticated user information"""
    user = await user_repo.get_by_id(current_user.sub)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
