import json
import logging
from pathlib import Path
from typing import List, Union

from blogindex.schemas.index import ContentIndex
from blogindex.services.content_loader import LoadResult
from blogindex.services.summary_splitter import excerpt

logger = logging.getLogger(__name__)


def build_manifest(index: ContentIndex, summary_words: int = 70) -> dict:
    """JSON-ready listing of the index: posts in order plus tag and category lookups."""
    return {
        "posts": [
            {
                "slug": post.slug,
                "title": post.title,
                "date": post.date.isoformat(),
                "permalink": post.permalink,
                "tags": list(post.tags),
                "categories": list(post.categories),
                "summary": excerpt(post, summary_words),
            }
            for post in index.posts
        ],
        "tags": {
            group.name: [post.slug for post in group.posts]
            for group in index.tags.values()
        },
        "categories": {
            group.name: [post.slug for post in group.posts]
            for group in index.categories.values()
        },
    }


def write_manifest(manifest: dict, output: Union[str, Path]) -> Path:
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)
    logger.info(f"Wrote {len(manifest['posts'])} posts -> {output}")
    return output


def find_drafts(loaded: LoadResult) -> List[str]:
    return sorted(post.path for post in loaded.posts if post.draft)
