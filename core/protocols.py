from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from models.room import Room, RoomOccupant


class IPlacement(Protocol):
    """Anything that says where a resident lives (Resident or a snapshot of one)"""

    id: str
    room_number: str
    status: str


class IRoomRepository(Protocol):
    """Room store operations the occupancy synchronizer depends on (DIP)"""

    async def get_by_number(
        self, number: str, *, for_update: bool = False
    ) -> Room | None:
        """Get the current state of a room by its external number"""
        ...

    async def get_current(self, room_id: str, *, for_update: bool = False) -> Room | None:
        """Get the current state of a room by id"""
        ...

    async def count_occupants(self, room_id: str) -> int:
        ...

    async def get_occupancy(self, resident_id: str) -> RoomOccupant | None:
        """Occupant row for a resident, in whichever room holds it"""
        ...

    async def add_occupant(self, room_id: str, resident_id: str) -> RoomOccupant:
        ...

    async def remove_occupant(self, room_id: str, resident_id: str) -> int:
        ...

    async def update_if_version(
        self, room: Room, expected_version: int, **values: Any
    ) -> bool:
        """Conditional room write; False when the version moved on"""
        ...
