from typing import Any, Optional

from sqlalchemy import Row, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.resident import Resident
from models.room import Room, RoomOccupant
from repositories.base import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """
    Repository for rooms and their occupant lists.

    Occupant rows are only written through add_occupant / remove_occupant,
    which OccupancySynchronizer pairs with a versioned room write.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db, Room)

    async def _get_current(self, criterion, for_update: bool) -> Optional[Room]:
        # populate_existing: the identity map may hold a copy read earlier in
        # the transaction, and version checks need the current row
        query = (
            select(Room).where(criterion).execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_number(
        self, number: str, *, for_update: bool = False
    ) -> Optional[Room]:
        """Get room by its external number, optionally row-locked"""
        return await self._get_current(Room.number == number, for_update)

    async def get_current(
        self, room_id: str, *, for_update: bool = False
    ) -> Optional[Room]:
        """Re-read a room by id, bypassing any stale in-session copy"""
        return await self._get_current(Room.id == room_id, for_update)

    async def list_rooms(self, skip: int = 0, limit: int = 100) -> list[Room]:
        """Get rooms ordered by number"""
        result = await self.db.execute(
            select(Room).order_by(Room.number).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def number_exists(self, number: str, exclude_id: str | None = None) -> bool:
        query = select(Room.id).where(Room.number == number)
        if exclude_id:
            query = query.where(Room.id != exclude_id)
        result = await self.db.execute(query)
        return result.first() is not None

    async def count_occupants(self, room_id: str) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(RoomOccupant)
            .where(RoomOccupant.room_id == room_id)
        )
        return result.scalar_one()

    async def get_occupancy(self, resident_id: str) -> Optional[RoomOccupant]:
        """Occupant row for a resident, in whichever room holds it"""
        result = await self.db.execute(
            select(RoomOccupant).where(RoomOccupant.resident_id == resident_id)
        )
        return result.scalar_one_or_none()

    async def get_occupants(self, room_ids: list[str]) -> dict[str, list[Row]]:
        """
        Occupant lists for the given rooms, in insertion order.

        Each row exposes resident_id, name and check_in joined from the
        resident record.
        """
        occupants: dict[str, list[Row]] = {room_id: [] for room_id in room_ids}
        if not room_ids:
            return occupants

        result = await self.db.execute(
            select(
                RoomOccupant.room_id,
                Resident.id.label("resident_id"),
                Resident.name,
                Resident.check_in,
            )
            .join(Resident, Resident.id == RoomOccupant.resident_id)
            .where(RoomOccupant.room_id.in_(room_ids))
            .order_by(RoomOccupant.room_id, RoomOccupant.position)
        )
        for row in result.all():
            occupants[row.room_id].append(row)
        return occupants

    async def add_occupant(self, room_id: str, resident_id: str) -> RoomOccupant:
        """Append a resident to the end of a room's occupant list"""
        result = await self.db.execute(
            select(func.coalesce(func.max(RoomOccupant.position), 0)).where(
                RoomOccupant.room_id == room_id
            )
        )
        occupant = RoomOccupant(
            room_id=room_id,
            resident_id=resident_id,
            position=result.scalar_one() + 1,
        )
        self.db.add(occupant)
        await self.db.flush()
        return occupant

    async def remove_occupant(self, room_id: str, resident_id: str) -> int:
        """Drop a resident from a room's occupant list; returns rows removed"""
        result = await self.db.execute(
            delete(RoomOccupant).where(
                RoomOccupant.room_id == room_id,
                RoomOccupant.resident_id == resident_id,
            )
        )
        return result.rowcount

    async def update_if_version(
        self, room: Room, expected_version: int, **values: Any
    ) -> bool:
        """
        Conditionally write room columns and bump its version.

        Returns False when another writer changed the room since
        `expected_version` was read (lost update detected).
        """
        result = await self.db.execute(
            update(Room)
            .where(Room.id == room.id, Room.version == expected_version)
            .values(**values, version=expected_version + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return False
        await self.db.refresh(room)
        return True
