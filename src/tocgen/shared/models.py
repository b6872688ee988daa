from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tocgen.toc.builder import TocNode, build_heading_forest


class TocEntry(BaseModel):
    """Serialisable form of a TocNode, nested the way renderers consume it."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    slug: str
    children: list["TocEntry"] = Field(default_factory=list)
    display_depth: int | None = Field(default=None, alias="displayDepth")

    @classmethod
    def from_node(cls, node: TocNode, include_depth: bool = True) -> "TocEntry":
        return cls(
            title=node.title,
            slug=node.slug,
            children=[cls.from_node(child, include_depth) for child in node.children],
            display_depth=node.display_depth if include_depth else None,
        )


class ArticleIndex(BaseModel):
    slug: str
    version: str
    title: str
    content: str
    headings: list[str] = Field(default_factory=list)


class Article(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    slug: str
    title: str
    content: str = ""
    template_id: int = 0
    is_book: bool = False
    tags: list[str] = Field(default_factory=list)
    read_num: int = 0
    comment_num: int = 0
    version: int = 1
    book_refer: int | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        return value

    @property
    def sid(self) -> str:
        return str(self.id)

    @property
    def raw_tags(self) -> str:
        return ",".join(self.tags)

    @property
    def index_id(self) -> str:
        return f"{self.id}.{self.version}"

    def toc(self, marker: str = "#") -> list[TocNode]:
        return build_heading_forest(self.content, marker=marker)

    def to_index_data(self, marker: str = "#") -> ArticleIndex:
        forest = self.toc(marker=marker)
        return ArticleIndex(
            slug=self.slug,
            version=str(self.version),
            title=self.title,
            content=self.content,
            headings=[node.title for root in forest for node in root.walk()],
        )


class ArticleHistory(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    article_id: int
    version: int
    desc: str = ""
    content: str = ""
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def index_id(self) -> str:
        return f"{self.article_id}.{self.version}"
