"""Create the administrator account configured in settings (ADMIN_EMAIL / ADMIN_PASSWORD)"""
import asyncio
import sys

from core.config import get_settings
from core.database import AsyncSessionLocal, create_tables
from core.enums import UserRole
from repositories.user_repo import UserRepository


async def seed_admin() -> int:
    settings = get_settings()
    if not settings.admin_password:
        print("ADMIN_PASSWORD is not set. Set it in the environment or .env first.")
        return 1

    await create_tables()

    async with AsyncSessionLocal.begin() as db:
        user_repo = UserRepository(db)
        existing = await user_repo.get_by_email(settings.admin_email)
        if existing:
            print(f"Admin user already exists: {existing.email}")
            return 0

        admin = await user_repo.create_user(
            name=settings.admin_name,
            email=settings.admin_email,
            password=settings.admin_password,
            role=UserRole.ADMIN.value,
        )

    print(f"Admin user created: {admin.email}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(seed_admin()))
