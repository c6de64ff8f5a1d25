from datetime import date
from enum import Enum
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.deps import (
    get_current_user,
    get_maintenance_repo,
    get_maintenance_repo_transactional,
)
from core.exceptions import ResourceNotFoundError
from models.maintenance import MaintenanceRequest
from repositories.maintenance_repo import MaintenanceRepository
from schemas.maintenance import (
    MaintenanceCreate,
    MaintenanceResponse,
    MaintenanceStatusUpdate,
    MaintenanceUpdate,
)

router = APIRouter(dependencies=[Depends(get_current_user)])


async def _get_or_404(repo: MaintenanceRepository, request_id: str) -> MaintenanceRequest:
    request = await repo.get_by_id(request_id)
    if not request:
        raise ResourceNotFoundError("Maintenance request", request_id)
    return request


@router.get("/", response_model=list[MaintenanceResponse])
async def list_requests(
    repo: Annotated[MaintenanceRepository, Depends(get_maintenance_repo)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List maintenance requests, newest first"""
    return await repo.get_all(skip, limit)


@router.post("/", response_model=MaintenanceResponse, status_code=status.HTTP_201_CREATED)
async def create_request(
    data: MaintenanceCreate,
    repo: Annotated[MaintenanceRepository, Depends(get_maintenance_repo_transactional)],
):
    return await repo.create(
        MaintenanceRequest(
            room_number=data.room_number,
            issue=data.issue,
            type=data.type or "Others",
            priority=data.priority.value,
            status=data.status.value,
            reported_by=data.reported_by,
            reported_on=data.reported_on or date.today(),
        )
    )


@router.put("/{request_id}", response_model=MaintenanceResponse)
async def update_request(
    request_id: str,
    data: MaintenanceUpdate,
    repo: Annotated[MaintenanceRepository, Depends(get_maintenance_repo_transactional)],
):
    request = await _get_or_404(repo, request_id)
    for field, value in data.model_dump(exclude_none=True).items():
        setattr(request, field, value.value if isinstance(value, Enum) else value)
    return await repo.update(request)


@router.post("/{request_id}/status", response_model=MaintenanceResponse)
async def update_request_status(
    request_id: str,
    data: MaintenanceStatusUpdate,
    repo: Annotated[MaintenanceRepository, Depends(get_maintenance_repo_transactional)],
):
    request = await _get_or_404(repo, request_id)
    request.status = data.status.value
    return await repo.update(request)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    request_id: str,
    repo: Annotated[MaintenanceRepository, Depends(get_maintenance_repo_transactional)],
):
    await repo.delete(await _get_or_404(repo, request_id))
