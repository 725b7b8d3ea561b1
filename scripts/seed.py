"""Database seeder: recreates the users table and fills it with sample users."""
import asyncio
import argparse
import time

from user_registry.database import engine, async_session, Base
from user_registry.repositories.user_repository import UserRepository
from user_registry.schemas import UserCreate
from user_registry.services.user_service import UserService

import user_registry.models  # noqa: F401


def sample_user(i: int) -> UserCreate:
    return UserCreate(
        name=f"User {i}",
        cpf=f"{i:011d}",
        email=f"user_{i:04d}@example.com",
        phone=f"+55 11 9{i:04d}-0000",
    )


async def seed(count: int = 10):
    print(f"Seeding: {count} users")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    created = 0
    async with async_session() as session:
        service = UserService(UserRepository(session))
        for i in range(count):
            result = await service.insert(sample_user(i))
            if result.ok:
                created += 1
            else:
                print(f"  Skipped user {i}: {result.payload}")
        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Users: {created}")


def main():
    parser = argparse.ArgumentParser(description="Seed the users database")
    parser.add_argument("--count", type=int, default=10, help="Number of users to create")
    args = parser.parse_args()
    asyncio.run(seed(count=args.count))


if __name__ == "__main__":
    main()
