from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PostSummary(BaseModel):
    slug: str
    path: str
    title: str
    permalink: str
    summary: Optional[str] = None
    publishedAt: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    author: Optional[str] = None
    readingTime: Optional[str] = None
    moreLink: Optional[str] = None


class PostDetail(PostSummary):
    description: Optional[str] = None
    content: str  # Markdown body without frontmatter
    summaryHtml: str
    contentHtml: str
    hasSummaryBreak: bool = False
    extra: Dict[str, Any] = Field(default_factory=dict)


class PostPage(BaseModel):
    items: List[PostSummary] = Field(default_factory=list)
    page: int
    pageSize: int
    total: int
    totalPages: int


class TermSummary(BaseModel):
    name: str
    key: str
    count: int


class TermDetail(TermSummary):
    posts: List[PostSummary] = Field(default_factory=list)


class VersionInfo(BaseModel):
    version: str
    gitCommit: str
    buildTime: str
