from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from blogindex.schemas.post import Diagnostic, Post, normalize_url
from blogindex.utils import term_key


class TermGroup(BaseModel):
    """Posts sharing one tag or category; `name` is the first spelling seen."""

    model_config = ConfigDict(frozen=True)

    name: str
    key: str
    posts: Tuple[Post, ...] = ()


class CategoryNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    key: str
    posts: Tuple[Post, ...] = ()
    children: Tuple["CategoryNode", ...] = ()


class ContentIndex(BaseModel):
    """Immutable result of one batch run, handed by reference to whoever renders it."""

    model_config = ConfigDict(frozen=True)

    posts: Tuple[Post, ...] = ()
    tags: Dict[str, TermGroup] = Field(default_factory=dict)
    categories: Dict[str, TermGroup] = Field(default_factory=dict)
    category_tree: Tuple[CategoryNode, ...] = ()
    by_url: Dict[str, Post] = Field(default_factory=dict)
    diagnostics: Tuple[Diagnostic, ...] = ()
    built_at: Optional[datetime] = None

    def get_post(self, slug: str) -> Optional[Post]:
        slug = slug.strip("/")
        for post in self.posts:
            if post.slug == slug:
                return post
        return self.by_url.get(normalize_url(slug))

    def get_tag(self, tag: str) -> Optional[TermGroup]:
        return self.tags.get(term_key(tag))

    def get_category(self, category: str) -> Optional[TermGroup]:
        return self.categories.get(term_key(category))

    def diagnostics_for(self, kind: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]
