from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import verify_token
from core.database import get_db, get_db_transactional
from core.enums import ADMIN_ROLE_ALIASES
from repositories.billing_repo import BillingRepository
from repositories.maintenance_repo import MaintenanceRepository
from repositories.resident_repo import ResidentRepository
from repositories.user_repo import UserRepository
from schemas.token import TokenPayload
from services.resident_service import ResidentService
from services.room_service import RoomService

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenPayload:
    """
    Validate JWT token and return authenticated user payload.
    Token must contain 'sub' (user_id), 'email' and 'role' claims.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = verify_token(credentials.credentials)
        return TokenPayload(**payload)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid authentication credentials: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


def require_role(*allowed_roles: str):
    """
    Dependency factory for route-level role checks (case-insensitive).

    Usage:
        @router.post("/", dependencies=[Depends(require_role("Admin"))])
    """
    allowed = {role.lower() for role in allowed_roles}
    if "admin" in allowed:
        allowed |= ADMIN_ROLE_ALIASES

    async def role_checker(
        user: TokenPayload = Depends(get_current_user),
    ) -> TokenPayload:
        if user.role.lower() not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return user

    return role_checker


require_admin = require_role("Admin")


async def get_user_repo(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """User repository dependency"""
    return UserRepository(db)


async def get_user_repo_transactional(
    db: AsyncSession = Depends(get_db_transactional),
) -> UserRepository:
    """User repository dependency with transaction management"""
    return UserRepository(db)


async def get_resident_repo(db: AsyncSession = Depends(get_db)) -> ResidentRepository:
    """Resident repository dependency (reads)"""
    return ResidentRepository(db)


async def get_resident_service(db: AsyncSession = Depends(get_db)) -> ResidentService:
    """Resident service for read operations"""
    return ResidentService(db)


async def get_resident_service_transactional(
    db: AsyncSession = Depends(get_db_transactional),
) -> ResidentService:
    """
    Resident service for writes. Resident changes and their room
    synchronization commit or roll back together.
    """
    return ResidentService(db)


async def get_room_service(db: AsyncSession = Depends(get_db)) -> RoomService:
    """Room service for read operations"""
    return RoomService(db)


async def get_room_service_transactional(
    db: AsyncSession = Depends(get_db_transactional),
) -> RoomService:
    """Room service with transaction management"""
    return RoomService(db)


async def get_maintenance_repo(
    db: AsyncSession = Depends(get_db),
) -> MaintenanceRepository:
    return MaintenanceRepository(db)


async def get_maintenance_repo_transactional(
    db: AsyncSession = Depends(get_db_transactional),
) -> MaintenanceRepository:
    return MaintenanceRepository(db)


async def get_billing_repo(db: AsyncSession = Depends(get_db)) -> BillingRepository:
    return BillingRepository(db)


async def get_billing_repo_transactional(
    db: AsyncSession = Depends(get_db_transactional),
) -> BillingRepository:
    return BillingRepository(db)
