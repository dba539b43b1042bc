import datetime
import logging
from collections import defaultdict
from typing import Iterable, List, Optional

from blogindex.errors import DuplicateURL, InvalidDate
from blogindex.schemas.index import CategoryNode, ContentIndex, TermGroup
from blogindex.schemas.post import Diagnostic, Post
from blogindex.utils import term_key

logger = logging.getLogger(__name__)


def build_index(
    posts: Iterable[Post],
    diagnostics: Iterable[Diagnostic] = (),
    *,
    include_future: bool = False,
    now: Optional[datetime.datetime] = None,
) -> ContentIndex:
    """
    Reduce parsed posts into the published listings.

    Drafts never reach any output. Future-dated posts are held back unless
    `include_future` is set. A post without a usable date, or whose permalink
    collides with another post, is left out and reported as a diagnostic;
    the rest of the corpus is indexed normally.
    """
    now = _as_aware(now) if now else datetime.datetime.now(datetime.timezone.utc)
    found: List[Diagnostic] = list(diagnostics)
    candidates: List[Post] = []

    for post in posts:
        if post.draft:
            logger.debug(f"Skipping draft {post.path}")
            continue
        if not isinstance(post.date, datetime.datetime):
            error = InvalidDate(post.path, post.date)
            logger.warning(f"Excluded from index: {error}")
            found.append(error.to_diagnostic())
            continue
        if not include_future and _as_aware(post.date) > now:
            logger.info(f"Holding back future post {post.path} ({post.date.isoformat()})")
            continue
        candidates.append(post)

    conflicted = set()
    for error in _find_duplicate_urls(candidates):
        logger.warning(f"Excluded from index: {error}")
        found.append(error.to_diagnostic())
        conflicted.add(error.path)

    listing = sort_posts(p for p in candidates if p.path not in conflicted)
    tags = _group_terms(listing, "tags")
    categories = _group_terms(listing, "categories")

    logger.info(
        f"Indexed {len(listing)} posts ({len(tags)} tags, "
        f"{len(categories)} categories, {len(found)} diagnostics)"
    )

    return ContentIndex(
        posts=tuple(listing),
        tags=tags,
        categories=categories,
        category_tree=_build_category_tree(listing),
        by_url={post.permalink: post for post in listing},
        diagnostics=tuple(found),
        built_at=now,
    )


def sort_posts(posts: Iterable[Post]) -> List[Post]:
    """Newest first; equal dates keep path order."""
    ordered = sorted(posts, key=lambda p: p.path)
    ordered.sort(key=lambda p: _as_aware(p.date), reverse=True)
    return ordered


def _find_duplicate_urls(posts: List[Post]) -> List[DuplicateURL]:
    claims = defaultdict(list)
    for post in sorted(posts, key=lambda p: p.path):
        claims[post.permalink].append(post)

    errors = []
    for url, claimants in claims.items():
        if len(claimants) < 2:
            continue
        for post in claimants:
            others = [p.path for p in claimants if p is not post]
            errors.append(DuplicateURL(post.path, url, others))
    return errors


def _group_terms(listing: List[Post], attr: str) -> dict[str, TermGroup]:
    names: dict[str, str] = {}
    members = defaultdict(list)
    for post in listing:
        for term in getattr(post, attr):
            key = term_key(term)
            names.setdefault(key, term)
            members[key].append(post)

    return {
        key: TermGroup(name=names[key], key=key, posts=tuple(members[key]))
        for key in sorted(names)
    }


def _build_category_tree(listing: List[Post]) -> tuple[CategoryNode, ...]:
    # Each post's categories are read as a path: first entry is the top level.
    root: dict = {}
    for post in listing:
        level = root
        for name in post.categories:
            node = level.setdefault(
                term_key(name), {"name": name, "posts": [], "children": {}}
            )
            node["posts"].append(post)
            level = node["children"]
    return _freeze_nodes(root)


def _freeze_nodes(level: dict) -> tuple[CategoryNode, ...]:
    return tuple(
        CategoryNode(
            name=node["name"],
            key=key,
            posts=tuple(node["posts"]),
            children=_freeze_nodes(node["children"]),
        )
        for key, node in sorted(level.items())
    )


def _as_aware(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value
