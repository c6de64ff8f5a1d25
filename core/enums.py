from enum import Enum


class ResidentStatus(str, Enum):
    """Resident tenancy status"""
    ACTIVE = "active"
    INACTIVE = "inactive"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class RoomStatus(str, Enum):
    """Room status enumeration"""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class RoomType(str, Enum):
    """Room category; determines how many residents a room holds"""
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    QUAD = "quad"

    @property
    def capacity(self) -> int:
        return _ROOM_CAPACITY[self]

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [room_type.value for room_type in cls]


_ROOM_CAPACITY = {
    RoomType.SINGLE: 1,
    RoomType.DOUBLE: 2,
    RoomType.TRIPLE: 3,
    RoomType.QUAD: 4,
}


def room_capacity(room_type: str) -> int:
    """Capacity for a stored room type string"""
    return RoomType(room_type).capacity


class UserRole(str, Enum):
    """Account roles"""
    ADMIN = "Admin"
    STAFF = "Staff"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [role.value for role in cls]


# Older seed data stored admins under this label
ADMIN_ROLE_ALIASES = frozenset({"admin", "administrator"})


class UserStatus(str, Enum):
    """Account status"""
    ACTIVE = "Active"
    INACTIVE = "Inactive"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class MaintenanceStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class MaintenancePriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [priority.value for priority in cls]


class BillingStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]
