from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.deps import (
    get_current_user,
    get_resident_repo,
    get_resident_service,
    get_resident_service_transactional,
)
from core.enums import ResidentStatus
from repositories.resident_repo import ResidentRepository
from schemas.resident import ResidentCreate, ResidentResponse, ResidentUpdate
from services.resident_service import ResidentService

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/", response_model=list[ResidentResponse])
async def list_residents(
    repo: Annotated[ResidentRepository, Depends(get_resident_repo)],
    status_filter: Annotated[ResidentStatus | None, Query(alias="status")] = None,
    room_number: Annotated[str | None, Query()] = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List residents, newest first"""
    return await repo.list_residents(
        status=status_filter.value if status_filter else None,
        room_number=room_number,
        skip=skip,
        limit=limit,
    )


@router.get("/{resident_id}", response_model=ResidentResponse)
async def get_resident(
    resident_id: str,
    service: Annotated[ResidentService, Depends(get_resident_service)],
):
    return await service.get_resident(resident_id)


@router.post("/", response_model=ResidentResponse, status_code=status.HTTP_201_CREATED)
async def create_resident(
    data: ResidentCreate,
    service: Annotated[ResidentService, Depends(get_resident_service_transactional)],
):
    """
    Check a resident in.

    Fails with 404 ROOM_NOT_FOUND or 409 ROOM_FULL when an active resident
    cannot be placed; nothing is saved in that case.
    """
    return await service.create_resident(data)


@router.put("/{resident_id}", response_model=ResidentResponse)
async def update_resident(
    resident_id: str,
    data: ResidentUpdate,
    service: Annotated[ResidentService, Depends(get_resident_service_transactional)],
):
    """Update a resident; room or status changes move it between occupant lists"""
    return await service.update_resident(resident_id, data)


@router.delete("/{resident_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resident(
    resident_id: str,
    service: Annotated[ResidentService, Depends(get_resident_service_transactional)],
):
    """Check a resident out; succeeds even if room cleanup could not complete"""
    await service.delete_resident(resident_id)
