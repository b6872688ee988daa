from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from tocgen.shared.db import SearchDocumentTable
from tocgen.shared.models import ArticleIndex


class SearchIndex(Protocol):
    async def index(self, doc_id: str, document: ArticleIndex) -> None: ...


class DatabaseSearchIndex:
    """Stores index payloads in the search_documents table of the record store."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def index(self, doc_id: str, document: ArticleIndex) -> None:
        await self.session.merge(
            SearchDocumentTable(
                id=doc_id,
                slug=document.slug,
                version=document.version,
                title=document.title,
                content=document.content,
                headings=document.headings,
                indexed_at=datetime.utcnow(),
            )
        )
        await self.session.flush()
