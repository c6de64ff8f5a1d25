from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.enums import ResidentStatus, RoomStatus
from core.exceptions import (
    ConcurrentUpdateError,
    HostelException,
    RoomFullError,
    RoomNotFoundError,
    StoreUnavailableError,
)
from core.logging import get_logger
from core.protocols import IPlacement, IRoomRepository
from models.room import Room
from repositories.room_repo import RoomRepository

logger = get_logger(__name__)


def is_placed(resident: IPlacement) -> bool:
    """Whether a resident must appear in a room's occupant list"""
    return resident.status == ResidentStatus.ACTIVE.value and bool(resident.room_number)


@dataclass(frozen=True)
class Placement:
    """Immutable copy of a resident's room assignment, taken before an update"""

    id: str
    room_number: str
    status: str

    @classmethod
    def of(cls, resident: IPlacement) -> Placement:
        return cls(id=resident.id, room_number=resident.room_number, status=resident.status)


class OccupancySynchronizer:
    """
    Keeps Room occupant lists and statuses in agreement with Residents.

    Residents are the source of truth; the occupant list is derived state
    written only here. Every change to a room's occupant list is paired with a
    versioned write of the room row, so two requests racing for the last bed
    cannot both succeed: the loser gets ConcurrentUpdateError and its
    transaction rolls back.

    Failure policy:
        - placing (create / update): errors propagate and fail the caller
        - removing: errors are logged and swallowed inside a savepoint
    """

    def __init__(self, db: AsyncSession, room_repo: IRoomRepository | None = None):
        self.db = db
        self.room_repo = room_repo or RoomRepository(db)

    async def on_resident_added(self, resident: IPlacement) -> None:
        """
        Place an active resident in the room named by its room number.

        Raises:
            RoomNotFoundError: no room has that number
            RoomFullError: the room is at capacity
            ConcurrentUpdateError: the room changed underneath us
            StoreUnavailableError: the database call failed
        """
        if not is_placed(resident):
            return

        try:
            await self._place(resident)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("room placement", str(e)) from e

    async def on_resident_removed(self, room_number: str, resident_id: str) -> None:
        """Best-effort removal of a resident from a room's occupant list"""
        if not room_number:
            return

        try:
            async with self.db.begin_nested():
                room = await self.room_repo.get_by_number(room_number, for_update=True)
                if room is None:
                    logger.info(
                        "Room %s not found while removing resident %s; nothing to do",
                        room_number,
                        resident_id,
                    )
                    return
                await self._detach(room, resident_id)
        except (SQLAlchemyError, HostelException):
            logger.warning(
                "Could not remove resident %s from room %s",
                resident_id,
                room_number,
                exc_info=True,
            )

    async def on_resident_updated(self, previous: IPlacement, updated: IPlacement) -> None:
        """
        Move a resident between rooms after its room number or status changed.

        Removal from the old room completes before placement in the new one,
        so the capacity check sees the freed bed when a resident stays put.
        """
        if (
            previous.room_number == updated.room_number
            and previous.status == updated.status
        ):
            return

        if is_placed(previous):
            await self.on_resident_removed(previous.room_number, previous.id)

        await self.on_resident_added(updated)

    async def _place(self, resident: IPlacement) -> None:
        room = await self.room_repo.get_by_number(resident.room_number, for_update=True)
        if room is None:
            raise RoomNotFoundError(resident.room_number)

        current = await self.room_repo.get_occupancy(resident.id)
        if current is not None and current.room_id == room.id:
            # Already listed; only make sure the status agrees
            await self._write_status(room, occupant_count=1)
            return

        if current is not None:
            # Listed in some other room: drop that stale entry first
            stale_room = await self.room_repo.get_current(current.room_id, for_update=True)
            if stale_room is not None:
                await self._detach(stale_room, resident.id)

        count = await self.room_repo.count_occupants(room.id)
        if count >= room.capacity:
            raise RoomFullError(room.number, room.capacity)

        await self.room_repo.add_occupant(room.id, resident.id)
        await self._write_status(room, occupant_count=count + 1, changed=True)
        logger.info(
            "Placed resident %s in room %s (%d/%d)",
            resident.id,
            room.number,
            count + 1,
            room.capacity,
        )

    async def _detach(self, room: Room, resident_id: str) -> None:
        removed = await self.room_repo.remove_occupant(room.id, resident_id)
        remaining = await self.room_repo.count_occupants(room.id)
        await self._write_status(room, occupant_count=remaining, changed=bool(removed))
        if removed:
            logger.info(
                "Removed resident %s from room %s (%d left)",
                resident_id,
                room.number,
                remaining,
            )

    async def _write_status(
        self, room: Room, occupant_count: int, changed: bool = False
    ) -> None:
        """
        Versioned write of the room's derived status.

        Maintenance is an administrative state and is never overwritten here.
        Skipped when neither the occupant list nor the status changed.
        """
        if room.status == RoomStatus.MAINTENANCE.value:
            status = room.status
        elif occupant_count:
            status = RoomStatus.OCCUPIED.value
        else:
            status = RoomStatus.AVAILABLE.value

        if not changed and status == room.status:
            return

        if not await self.room_repo.update_if_version(room, room.version, status=status):
            raise ConcurrentUpdateError(room.number)
