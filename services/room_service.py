from __future__ import annotations

from typing import Any

from sqlalchemy import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.enums import RoomStatus, room_capacity
from core.exceptions import (
    ConcurrentUpdateError,
    ResourceNotFoundError,
    RoomConflictError,
)
from core.logging import get_logger
from models.room import Room
from repositories.resident_repo import ResidentRepository
from repositories.room_repo import RoomRepository
from schemas.room import RoomCreate, RoomUpdate

logger = get_logger(__name__)


class RoomService:
    """Administrative room management; never touches occupant lists"""

    def __init__(
        self,
        db: AsyncSession,
        room_repo: RoomRepository | None = None,
        resident_repo: ResidentRepository | None = None,
    ) -> None:
        self.db = db
        self.room_repo = room_repo or RoomRepository(db)
        self.resident_repo = resident_repo or ResidentRepository(db)

    async def get_room(self, room_id: str, *, for_update: bool = False) -> Room:
        room = await self.room_repo.get_current(room_id, for_update=for_update)
        if not room:
            raise ResourceNotFoundError("Room", room_id)
        return room

    async def with_occupants(self, rooms: list[Room]) -> list[tuple[Room, list[Row]]]:
        """Pair rooms with their occupant lists for display"""
        occupants = await self.room_repo.get_occupants([room.id for room in rooms])
        return [(room, occupants[room.id]) for room in rooms]

    async def create_room(self, data: RoomCreate) -> Room:
        if await self.room_repo.number_exists(data.number):
            raise RoomConflictError(f"Room number '{data.number}' already exists", data.number)

        # A new room has no occupants; only maintenance is a meaningful start state
        status = (
            RoomStatus.MAINTENANCE.value
            if data.status == RoomStatus.MAINTENANCE
            else RoomStatus.AVAILABLE.value
        )
        room = Room(
            number=data.number,
            type=data.type.value,
            price_per_month=data.price_per_month,
            status=status,
        )
        try:
            async with self.db.begin_nested():
                room = await self.room_repo.create(room)
        except IntegrityError as e:
            raise RoomConflictError(
                f"Room number '{data.number}' already exists", data.number
            ) from e
        return room

    async def update_room(self, room_id: str, data: RoomUpdate) -> Room:
        """
        Update number, type, price or administrative status.

        - type may not shrink capacity below the current occupant count
        - a new number must be unique; residents follow the room to it
        - status 'maintenance' is kept as given, anything else is
          recomputed from occupancy
        """
        room = await self.get_room(room_id, for_update=True)
        count = await self.room_repo.count_occupants(room.id)
        values: dict[str, Any] = {}

        if data.type is not None and data.type.value != room.type:
            if room_capacity(data.type.value) < count:
                raise RoomConflictError(
                    f"Room '{room.number}' has {count} occupants; "
                    f"type '{data.type.value}' holds {data.type.capacity}",
                    room.number,
                )
            values["type"] = data.type.value

        old_number = room.number
        if data.number is not None and data.number != room.number:
            if await self.room_repo.number_exists(data.number, exclude_id=room.id):
                raise RoomConflictError(
                    f"Room number '{data.number}' already exists", data.number
                )
            values["number"] = data.number

        if data.price_per_month is not None:
            values["price_per_month"] = data.price_per_month

        if data.status is not None:
            if data.status == RoomStatus.MAINTENANCE:
                values["status"] = RoomStatus.MAINTENANCE.value
            elif count:
                values["status"] = RoomStatus.OCCUPIED.value
            else:
                values["status"] = RoomStatus.AVAILABLE.value

        if not values:
            return room

        if not await self.room_repo.update_if_version(room, room.version, **values):
            raise ConcurrentUpdateError(old_number)

        if "number" in values:
            moved = await self.resident_repo.repoint_room_number(old_number, room.number)
            logger.info(
                "Renumbered room %s -> %s (%d residents updated)",
                old_number,
                room.number,
                moved,
            )
        return room

    async def delete_room(self, room_id: str) -> None:
        room = await self.get_room(room_id, for_update=True)
        count = await self.room_repo.count_occupants(room.id)
        if count:
            raise RoomConflictError(
                f"Room '{room.number}' still has {count} occupant(s)", room.number
            )
        await self.room_repo.delete(room)
