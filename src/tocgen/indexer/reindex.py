import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tocgen.indexer.search import DatabaseSearchIndex, SearchIndex
from tocgen.shared.config import Settings
from tocgen.shared.db import ArticleTable, create_tables, get_engine
from tocgen.shared.models import Article

logger = logging.getLogger(__name__)


class ArticleIndexer:
    """Rebuilds the search index payload of every live article.

    Fails fast: the first article the search index rejects aborts the run.
    """

    def __init__(self, settings: Settings, search_index: SearchIndex):
        self.settings = settings
        self.search_index = search_index
        self.batch_size = settings.reindex_batch_size

    async def index_article(self, article: Article) -> None:
        try:
            data = article.to_index_data(marker=self.settings.heading_marker)
            await self.search_index.index(article.index_id, data)
        except Exception as e:
            logger.error(f"Failed to index article {article.slug} ({article.index_id}): {e}")
            raise
        logger.debug(f"Indexed {article.index_id} with {len(data.headings)} headings")

    async def reindex_all(self, session: AsyncSession) -> int:
        indexed = 0
        offset = 0

        while True:
            result = await session.execute(
                select(ArticleTable)
                .where(ArticleTable.deleted_at.is_(None))
                .order_by(ArticleTable.id)
                .offset(offset)
                .limit(self.batch_size)
            )
            rows = result.scalars().all()
            if not rows:
                break

            for row in rows:
                await self.index_article(Article.model_validate(row))
                indexed += 1

            offset += len(rows)

        logger.info(f"Reindexed {indexed} articles")
        return indexed


async def run_reindex(settings: Settings) -> int:
    engine = get_engine(settings.database_url)
    try:
        await create_tables(engine)
        session_factory = async_sessionmaker(engine, expire_on_commit=False)

        async with session_factory() as session:
            indexer = ArticleIndexer(settings, DatabaseSearchIndex(session))
            count = await indexer.reindex_all(session)
            await session.commit()
    finally:
        await engine.dispose()

    return count
