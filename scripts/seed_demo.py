"""Seed demo accounts and a few rooms for local development"""
import asyncio

from core.database import AsyncSessionLocal, create_tables
from core.enums import RoomType, UserRole
from repositories.room_repo import RoomRepository
from repositories.user_repo import UserRepository
from schemas.room import RoomCreate
from services.room_service import RoomService

DEMO_USERS = [
    {"name": "Admin Demo", "email": "admin@hostel.com", "password": "admin123", "role": UserRole.ADMIN},
    {"name": "Staff Demo", "email": "staff@hostel.com", "password": "staff1234", "role": UserRole.STAFF},
]

DEMO_ROOMS = [
    ("101", RoomType.SINGLE, 4500),
    ("102", RoomType.DOUBLE, 3500),
    ("103", RoomType.DOUBLE, 3500),
    ("201", RoomType.TRIPLE, 3000),
    ("202", RoomType.QUAD, 2500),
]


async def seed_demo() -> None:
    await create_tables()

    async with AsyncSessionLocal.begin() as db:
        user_repo = UserRepository(db)
        for demo in DEMO_USERS:
            if await user_repo.get_by_email(demo["email"]):
                print(f"Already exists: {demo['email']}")
                continue
            await user_repo.create_user(
                name=demo["name"],
                email=demo["email"],
                password=demo["password"],
                role=demo["role"].value,
            )
            print(f"Created user: {demo['email']}")

        room_repo = RoomRepository(db)
        room_service = RoomService(db, room_repo=room_repo)
        for number, room_type, price in DEMO_ROOMS:
            if await room_repo.number_exists(number):
                print(f"Room {number} already exists")
                continue
            await room_service.create_room(
                RoomCreate(number=number, type=room_type, price_per_month=price)
            )
            print(f"Created room {number} ({room_type.value})")


if __name__ == "__main__":
    asyncio.run(seed_demo())
