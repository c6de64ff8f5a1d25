from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.enums import BillingStatus
from models.billing import Billing
from repositories.base import BaseRepository


class BillingRepository(BaseRepository[Billing]):
    """Repository for billing records"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Billing)

    async def mark_paid(self, billing_id: str, paid_on: date | None = None) -> Optional[Billing]:
        """Set status to Paid and stamp the payment date (today by default)"""
        billing = await self.get_by_id(billing_id)
        if not billing:
            return None

        billing.status = BillingStatus.PAID.value
        billing.paid_on = paid_on or date.today()
        return await self.update(billing)
