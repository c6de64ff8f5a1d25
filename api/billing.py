from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.deps import get_billing_repo, get_billing_repo_transactional, get_current_user
from core.exceptions import ResourceNotFoundError
from models.billing import Billing
from repositories.billing_repo import BillingRepository
from schemas.billing import BillingCreate, BillingResponse
from utils.generators import generate_invoice_no

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/", response_model=list[BillingResponse])
async def list_billing(
    repo: Annotated[BillingRepository, Depends(get_billing_repo)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List billing records, newest first"""
    return await repo.get_all(skip, limit)


@router.post("/", response_model=BillingResponse, status_code=status.HTTP_201_CREATED)
async def create_billing(
    data: BillingCreate,
    repo: Annotated[BillingRepository, Depends(get_billing_repo_transactional)],
):
    return await repo.create(
        Billing(
            invoice_no=data.invoice_no or generate_invoice_no(data.month),
            resident_name=data.resident_name,
            room_number=data.room_number,
            amount=data.amount,
            month=data.month,
            status=data.status.value,
            method=data.method or "Cash",
            due_date=data.due_date,
            paid_on=data.paid_on,
            notes=data.notes,
        )
    )


@router.patch("/{billing_id}/pay", response_model=BillingResponse)
async def pay_billing(
    billing_id: str,
    repo: Annotated[BillingRepository, Depends(get_billing_repo_transactional)],
):
    """Mark a billing record paid today"""
    billing = await repo.mark_paid(billing_id)
    if not billing:
        raise ResourceNotFoundError("Billing record", billing_id)
    return billing
