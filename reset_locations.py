"""Delete every stored location report"""
import asyncio

from location_api.models.database import async_session_maker, init_db
from location_api.services import location_service


async def reset_locations():
    # Make sure the table exists before clearing it
    await init_db()

    async with async_session_maker() as session:
        removed = await location_service.reset_all(session)
        await session.commit()
        print(f"Deleted {removed} location(s)")


if __name__ == "__main__":
    asyncio.run(reset_locations())
