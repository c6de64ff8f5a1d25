from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.resident import Resident
from repositories.base import BaseRepository


class ResidentRepository(BaseRepository[Resident]):
    """Repository for Resident entity"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Resident)

    async def list_residents(
        self,
        status: Optional[str] = None,
        room_number: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Resident]:
        """Get residents, newest first, optionally filtered"""
        query = select(Resident)
        if status:
            query = query.where(Resident.status == status)
        if room_number:
            query = query.where(Resident.room_number == room_number)
        result = await self.db.execute(
            query.order_by(Resident.created_at.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def repoint_room_number(self, old_number: str, new_number: str) -> int:
        """Move every resident referencing a renumbered room to its new number"""
        result = await self.db.execute(
            update(Resident)
            .where(Resident.room_number == old_number)
            .values(room_number=new_number)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
