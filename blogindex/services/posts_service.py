import datetime
import logging
import math
from typing import List, Optional

from blogindex.schemas.blog import (
    PostDetail,
    PostPage,
    PostSummary,
    TermDetail,
    TermSummary,
)
from blogindex.schemas.index import ContentIndex, TermGroup
from blogindex.schemas.post import Post
from blogindex.services.renderer import render_post
from blogindex.services.summary_splitter import excerpt

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, index: ContentIndex, page_size: int = 8, summary_words: int = 70):
        self.index = index
        self.page_size = max(page_size, 1)
        self.summary_words = summary_words

    def list_posts(self, page: int = 1) -> Optional[PostPage]:
        """One page of the chronological listing, or None past the last page."""
        total = len(self.index.posts)
        total_pages = max(math.ceil(total / self.page_size), 1)
        if page < 1 or page > total_pages:
            return None

        start = (page - 1) * self.page_size
        items = self.index.posts[start : start + self.page_size]
        return PostPage(
            items=[self._summarize(p) for p in items],
            page=page,
            pageSize=self.page_size,
            total=total,
            totalPages=total_pages,
        )

    def get_post(self, slug: str) -> Optional[PostDetail]:
        post = self.index.get_post(slug)
        if not post:
            return None
        rendered = render_post(post)
        return PostDetail(
            **self._summarize(post).model_dump(),
            description=post.description or None,
            content=post.body,
            summaryHtml=rendered.summary_html,
            contentHtml=rendered.content_html,
            hasSummaryBreak=post.has_summary_break,
            extra=post.extra,
        )

    def list_tags(self) -> List[TermSummary]:
        return [_term_summary(group) for group in self.index.tags.values()]

    def get_tag(self, tag: str) -> Optional[TermDetail]:
        group = self.index.get_tag(tag)
        return self._term_detail(group) if group else None

    def list_categories(self) -> List[TermSummary]:
        return [_term_summary(group) for group in self.index.categories.values()]

    def get_category(self, category: str) -> Optional[TermDetail]:
        group = self.index.get_category(category)
        return self._term_detail(group) if group else None

    def _summarize(self, post: Post) -> PostSummary:
        return PostSummary(
            slug=post.slug,
            path=post.path,
            title=post.title,
            permalink=post.permalink,
            summary=excerpt(post, self.summary_words),
            publishedAt=_convert_date(post.date),
            tags=list(post.tags),
            categories=list(post.categories),
            author=post.author or None,
            readingTime=post.reading_time,
            moreLink=post.more_link,
        )

    def _term_detail(self, group: TermGroup) -> TermDetail:
        return TermDetail(
            **_term_summary(group).model_dump(),
            posts=[self._summarize(p) for p in group.posts],
        )


def _term_summary(group: TermGroup) -> TermSummary:
    return TermSummary(name=group.name, key=group.key, count=len(group.posts))


def _convert_date(value):
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value
