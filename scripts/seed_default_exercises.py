"""Insert the shared default exercise library (safe to re-run)."""

import asyncio
import logging

from liftlog.core.config import get_settings
from liftlog.core.logging import configure_logging
from liftlog.db.session import async_session_maker, engine
from liftlog.services.seed import seed_default_exercises

logger = logging.getLogger("liftlog.scripts.seed")


async def main() -> None:
    configure_logging(get_settings())
    async with async_session_maker() as session:
        added = await seed_default_exercises(session)
    logger.info("Done, %d exercises added", added)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
