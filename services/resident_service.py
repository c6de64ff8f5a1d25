from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ResourceNotFoundError
from core.logging import get_logger
from models.resident import Resident
from repositories.resident_repo import ResidentRepository
from schemas.resident import ResidentCreate, ResidentUpdate
from services.occupancy_service import OccupancySynchronizer, Placement

logger = get_logger(__name__)


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class ResidentService:
    """
    Resident check-in, edits and check-out, each paired with room synchronization.

    Create and update run inside a savepoint together with their room
    placement, so a RoomNotFound / RoomFull failure leaves no trace of the
    resident change even if the caller keeps using the session.
    """

    def __init__(
        self,
        db: AsyncSession,
        resident_repo: ResidentRepository | None = None,
        synchronizer: OccupancySynchronizer | None = None,
    ) -> None:
        self.db = db
        self.resident_repo = resident_repo or ResidentRepository(db)
        self.synchronizer = synchronizer or OccupancySynchronizer(db)

    async def get_resident(self, resident_id: str) -> Resident:
        resident = await self.resident_repo.get_by_id(resident_id)
        if not resident:
            raise ResourceNotFoundError("Resident", resident_id)
        return resident

    async def create_resident(self, data: ResidentCreate) -> Resident:
        """Persist a resident and place it in its room as one unit"""
        async with self.db.begin_nested():
            resident = await self.resident_repo.create(
                Resident(
                    name=data.name,
                    room_number=data.room_number,
                    phone=data.phone,
                    status=_plain(data.status),
                    check_in=date.today(),
                    expected_checkout=data.expected_checkout,
                )
            )
            await self.synchronizer.on_resident_added(resident)

        logger.info("Created resident %s in room %s", resident.id, resident.room_number)
        return resident

    async def update_resident(self, resident_id: str, data: ResidentUpdate) -> Resident:
        """Apply a partial update, then move the resident between rooms if needed"""
        resident = await self.get_resident(resident_id)
        previous = Placement.of(resident)

        async with self.db.begin_nested():
            for field, value in data.model_dump(exclude_none=True).items():
                setattr(resident, field, _plain(value))
            resident = await self.resident_repo.update(resident)
            await self.synchronizer.on_resident_updated(previous, resident)

        return resident

    async def delete_resident(self, resident_id: str) -> None:
        """
        Delete a resident, then clear it from its room.

        Room cleanup is best effort: the deletion succeeds even if the
        occupant list could not be updated.
        """
        resident = await self.get_resident(resident_id)
        placement = Placement.of(resident)

        await self.resident_repo.delete(resident)
        await self.synchronizer.on_resident_removed(placement.room_number, placement.id)
        logger.info("Deleted resident %s", placement.id)
