from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from core.enums import MaintenancePriority, MaintenanceStatus
from schemas.validators import NonBlankStr, RoomNumber


class MaintenanceCreate(BaseModel):
    room_number: RoomNumber
    issue: NonBlankStr
    type: str = "Others"
    priority: MaintenancePriority = MaintenancePriority.MEDIUM
    status: MaintenanceStatus = MaintenanceStatus.OPEN
    reported_by: str = ""
    reported_on: date | None = None


class MaintenanceUpdate(BaseModel):
    room_number: RoomNumber | None = None
    issue: NonBlankStr | None = None
    type: str | None = None
    priority: MaintenancePriority | None = None
    status: MaintenanceStatus | None = None
    reported_by: str | None = None
    reported_on: date | None = None


class MaintenanceStatusUpdate(BaseModel):
    status: MaintenanceStatus


class MaintenanceResponse(BaseModel):
    id: str
    room_number: str
    issue: str
    type: str
    priority: MaintenancePriority
    status: MaintenanceStatus
    reported_by: str
    reported_on: date
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
