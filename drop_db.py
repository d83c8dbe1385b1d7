import asyncio

from sqlalchemy import text

from liftlog.db.base import Base
from liftlog.db.session import engine
from liftlog.models import *  # noqa: F401, F403 - register all models


async def drop_tables():
    print("Dropping all tables...")
    async with engine.begin() as conn:
        await conn.execute(text("DROP TABLE IF EXISTS alembic_version"))
        await conn.run_sync(Base.metadata.drop_all)
    print("Tables dropped.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(drop_tables())
