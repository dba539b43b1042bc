import datetime
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from blogindex.errors import ContentError, ContentRootNotFound
from blogindex.schemas.index import ContentIndex
from blogindex.schemas.post import Diagnostic, Post
from blogindex.services.frontmatter_parser import parse_post
from blogindex.services.index_builder import build_index

logger = logging.getLogger(__name__)


class LoadResult(BaseModel):
    posts: List[Post] = Field(default_factory=list)
    diagnostics: List[Diagnostic] = Field(default_factory=list)


def discover_files(root: Path) -> List[Path]:
    """All Markdown files under root in path order, minus `_`-prefixed section/template files."""
    return sorted(
        path
        for path in root.rglob("*.md")
        if path.is_file() and not path.name.startswith("_")
    )


def load_file(file_path: Path, root: Path) -> Union[Post, Diagnostic]:
    """Read and parse one file; any per-file failure comes back as a Diagnostic."""
    rel_path = file_path.relative_to(root).as_posix()
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Diagnostic(path=rel_path, kind="UnreadableFile", message=str(e))

    try:
        return parse_post(text, rel_path)
    except ContentError as e:
        return e.to_diagnostic()


def load_posts(root: Union[str, Path], max_workers: Optional[int] = None) -> LoadResult:
    root = Path(root)
    if not root.is_dir():
        raise ContentRootNotFound(root)

    files = discover_files(root)
    logger.info(f"Loading {len(files)} markdown files from {root}")

    # Files are independent; map in parallel, then collect on this thread.
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        results = list(pool.map(lambda path: load_file(path, root), files))

    result = LoadResult()
    for item in results:
        if isinstance(item, Diagnostic):
            logger.warning(f"[{item.kind}] {item.path}: {item.message}")
            result.diagnostics.append(item)
        else:
            result.posts.append(item)

    logger.info(
        f"Parsed {len(result.posts)} posts, {len(result.diagnostics)} files rejected"
    )
    return result


def build_site(
    root: Union[str, Path],
    *,
    include_future: bool = False,
    max_workers: Optional[int] = None,
    now: Optional[datetime.datetime] = None,
) -> ContentIndex:
    """Load every post under root and build the content index in one pass."""
    loaded = load_posts(root, max_workers=max_workers)
    return build_index(
        loaded.posts,
        loaded.diagnostics,
        include_future=include_future,
        now=now,
    )


def build_site_from_settings(current_settings) -> ContentIndex:
    """Build the index described by settings; a missing content root yields an empty index."""
    root = current_settings.content_root
    try:
        return build_site(
            root,
            include_future=current_settings.INCLUDE_FUTURE,
            max_workers=current_settings.max_workers,
        )
    except ContentRootNotFound as e:
        logger.error(str(e))
        return ContentIndex(
            diagnostics=(
                Diagnostic(path=str(root), kind="ContentRootNotFound", message=str(e)),
            ),
            built_at=datetime.datetime.now(datetime.timezone.utc),
        )
