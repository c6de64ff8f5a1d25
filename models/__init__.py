from models.billing import Billing
from models.maintenance import MaintenanceRequest

# Mixins for model composition
from models.mixins import CuidMixin, HostelModel, TimestampMixin, VersionedMixin
from models.resident import Resident
from models.room import Room, RoomOccupant
from models.user import User

__all__ = [
    # Models
    "User",
    "Room",
    "RoomOccupant",
    "Resident",
    "MaintenanceRequest",
    "Billing",
    # Mixins
    "CuidMixin",
    "TimestampMixin",
    "VersionedMixin",
    "HostelModel",
]
