from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.deps import (
    get_current_user,
    get_room_service,
    get_room_service_transactional,
    require_admin,
)
from schemas.room import RoomCreate, RoomResponse, RoomUpdate
from services.room_service import RoomService

router = APIRouter(dependencies=[Depends(get_current_user)])


async def _render(service: RoomService, room) -> RoomResponse:
    [(room, occupants)] = await service.with_occupants([room])
    return RoomResponse.from_orm_model(room, occupants)


@router.get("/", response_model=list[RoomResponse])
async def list_rooms(
    service: Annotated[RoomService, Depends(get_room_service)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List rooms ordered by number, each with its current occupants"""
    rooms = await service.room_repo.list_rooms(skip, limit)
    return [
        RoomResponse.from_orm_model(room, occupants)
        for room, occupants in await service.with_occupants(rooms)
    ]


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: str,
    service: Annotated[RoomService, Depends(get_room_service)],
):
    return await _render(service, await service.get_room(room_id))


@router.post(
    "/",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_room(
    data: RoomCreate,
    service: Annotated[RoomService, Depends(get_room_service_transactional)],
):
    return await _render(service, await service.create_room(data))


@router.put("/{room_id}", response_model=RoomResponse, dependencies=[Depends(require_admin)])
async def update_room(
    room_id: str,
    data: RoomUpdate,
    service: Annotated[RoomService, Depends(get_room_service_transactional)],
):
    """Update room details; occupants are managed through residents only"""
    return await _render(service, await service.update_room(room_id, data))


@router.delete(
    "/{room_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_room(
    room_id: str,
    service: Annotated[RoomService, Depends(get_room_service_transactional)],
):
    """Delete an empty room"""
    await service.delete_room(room_id)
