from sqlalchemy.ext.asyncio import AsyncSession

from models.maintenance import MaintenanceRequest
from repositories.base import BaseRepository


class MaintenanceRepository(BaseRepository[MaintenanceRequest]):
    """Repository for maintenance tickets; plain CRUD from BaseRepository"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, MaintenanceRequest)
