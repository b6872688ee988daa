import asyncio
import logging

from tocgen.indexer.reindex import run_reindex
from tocgen.shared.config import Settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


async def main():
    settings = Settings()
    logging.getLogger().setLevel(settings.log_level)

    logger.info("Starting full reindex")
    await run_reindex(settings)


if __name__ == "__main__":
    asyncio.run(main())
