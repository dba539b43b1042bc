import posixpath
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from blogindex.services.summary_splitter import SUMMARY_MARKER, split_summary
from blogindex.utils import calculate_reading_time


def normalize_url(url: str) -> str:
    """Normalize a permalink to a rooted path ending in '/' (files keep their name)."""
    url = "/" + url.strip().strip("/")
    if url == "/":
        return url
    if posixpath.splitext(url)[1]:
        return url
    return url + "/"


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    kind: str
    message: str


class Post(BaseModel):
    """A parsed Markdown post: typed frontmatter fields, opaque extras and the body."""

    model_config = ConfigDict(frozen=True)

    path: str
    title: str
    date: datetime
    draft: bool = False
    tags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    author: str = ""
    description: str = ""
    url: Optional[str] = None
    more_link: Optional[str] = None
    extra: Dict[str, Any] = Field(default_factory=dict)
    body: str = ""

    @property
    def summary(self) -> str:
        return split_summary(self.body)[0]

    @property
    def remainder(self) -> str:
        return split_summary(self.body)[1]

    @property
    def has_summary_break(self) -> bool:
        return SUMMARY_MARKER in self.body

    @property
    def slug(self) -> str:
        base, _ = posixpath.splitext(self.path)
        return base

    @property
    def permalink(self) -> str:
        return normalize_url(self.url if self.url else self.slug)

    @property
    def reading_time(self) -> str:
        return calculate_reading_time(self.body)
