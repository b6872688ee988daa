from datetime import datetime
from unittest.mock import patch

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from tocgen.indexer.reindex import ArticleIndexer, run_reindex
from tocgen.indexer.search import DatabaseSearchIndex
from tocgen.shared.config import Settings
from tocgen.shared.db import ArticleTable, Base, SearchDocumentTable
from tocgen.shared.models import ArticleIndex


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        reindex_batch_size=2,
    )


@pytest.fixture
async def db_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with session_factory() as session:
        session.add_all([
            ArticleTable(id=1, slug="first", title="First", content="# One\n## Two", version=2),
            ArticleTable(id=2, slug="second", title="Second", content="no headings"),
            ArticleTable(id=3, slug="third", title="Third", content="### Deep"),
            ArticleTable(id=4, slug="gone", title="Gone", content="# X", deleted_at=datetime.utcnow()),
        ])
        await session.commit()

    yield session_factory

    await engine.dispose()


class RecordingIndex:
    def __init__(self, fail_on: str | None = None):
        self.calls: list[tuple[str, ArticleIndex]] = []
        self.fail_on = fail_on

    async def index(self, doc_id: str, document: ArticleIndex) -> None:
        if doc_id == self.fail_on:
            raise RuntimeError("index unavailable")
        self.calls.append((doc_id, document))


@pytest.mark.asyncio
async def test_reindex_all_forwards_every_live_article(settings, db_session):
    search_index = RecordingIndex()
    indexer = ArticleIndexer(settings, search_index)

    async with db_session() as session:
        count = await indexer.reindex_all(session)

    assert count == 3
    assert [doc_id for doc_id, _ in search_index.calls] == ["1.2", "2.1", "3.1"]
    first = search_index.calls[0][1]
    assert first.slug == "first"
    assert first.version == "2"
    assert first.headings == ["One", "Two"]
    assert search_index.calls[1][1].headings == []


@pytest.mark.asyncio
async def test_reindex_all_fails_fast(settings, db_session):
    search_index = RecordingIndex(fail_on="2.1")
    indexer = ArticleIndexer(settings, search_index)

    async with db_session() as session:
        with pytest.raises(RuntimeError, match="index unavailable"):
            await indexer.reindex_all(session)

    assert [doc_id for doc_id, _ in search_index.calls] == ["1.2"]


@pytest.mark.asyncio
async def test_reindex_all_into_database_index(settings, db_session):
    async with db_session() as session:
        indexer = ArticleIndexer(settings, DatabaseSearchIndex(session))
        await indexer.reindex_all(session)
        await session.commit()

    async with db_session() as session:
        result = await session.execute(select(SearchDocumentTable).order_by(SearchDocumentTable.id))
        docs = result.scalars().all()

    assert [d.id for d in docs] == ["1.2", "2.1", "3.1"]
    assert docs[0].headings == ["One", "Two"]
    assert docs[2].title == "Third"


@pytest.mark.asyncio
async def test_run_reindex_on_empty_database(tmp_path):
    settings = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'articles.db'}")

    assert await run_reindex(settings) == 0


@pytest.mark.asyncio
async def test_reindex_all_logs_payload_failure(settings, db_session, caplog):
    search_index = RecordingIndex()
    indexer = ArticleIndexer(settings, search_index)

    with patch("tocgen.shared.models.build_heading_forest", side_effect=ValueError("bad payload")):
        async with db_session() as session:
            with pytest.raises(ValueError, match="bad payload"):
                await indexer.reindex_all(session)

    assert search_index.calls == []
    assert "Failed to index article first (1.2): bad payload" in caplog.text
