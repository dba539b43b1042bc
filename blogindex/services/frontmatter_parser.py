import datetime
import logging
import re
from typing import Any

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from blogindex.errors import InvalidDate, MalformedFrontmatter, MissingRequiredField
from blogindex.schemas.post import Post
from blogindex.utils import normalize_terms

logger = logging.getLogger(__name__)

KNOWN_FIELDS = (
    "title",
    "date",
    "draft",
    "tags",
    "categories",
    "author",
    "description",
    "url",
    "more_link",
)

_OPENING_DELIMITER = re.compile(r"^-{3,}\s*$")
_TRUE_STRINGS = {"true", "yes", "on", "1"}


class FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps impossible calendar dates (2024-02-30) as plain strings."""

    def construct_yaml_timestamp(self, node):
        try:
            return super().construct_yaml_timestamp(node)
        except ValueError:
            return self.construct_scalar(node)


FrontmatterLoader.add_constructor(
    "tag:yaml.org,2002:timestamp", FrontmatterLoader.construct_yaml_timestamp
)


def parse_post(text: str, path: str) -> Post:
    """
    Parse one Markdown file into a Post.

    The file must open with a `---` line; the block up to the next `---` line is
    loaded as YAML and must be a mapping. Keys the Post model does not know are
    kept in `extra`.
    """
    metadata, body = split_frontmatter(text, path)

    title = metadata.get("title")
    if title is None or not str(title).strip():
        raise MissingRequiredField(path, "title")

    raw_date = metadata.get("date")
    if raw_date is None or raw_date == "":
        raise MissingRequiredField(path, "date")

    post = Post(
        path=path,
        title=str(title).strip(),
        date=parse_date(raw_date, path),
        draft=_as_bool(metadata.get("draft", False)),
        tags=normalize_terms(metadata.get("tags")),
        categories=normalize_terms(metadata.get("categories")),
        author=_as_text(metadata.get("author")),
        description=_as_text(metadata.get("description")),
        url=_as_optional_text(metadata.get("url")),
        more_link=_as_optional_text(metadata.get("more_link")),
        extra={k: v for k, v in metadata.items() if k not in KNOWN_FIELDS},
        body=body,
    )
    logger.debug(f"Parsed {path}: {post.title!r} ({post.date.isoformat()})")
    return post


def split_frontmatter(text: str, path: str) -> tuple[dict[str, Any], str]:
    """Return the YAML header as a dict and the stripped body text."""
    text = text.lstrip("\ufeff")
    first_line = text.split("\n", 1)[0]
    if not _OPENING_DELIMITER.match(first_line):
        raise MalformedFrontmatter(path, "file does not start with '---'")

    handler = YAMLHandler()
    try:
        fm, content = handler.split(text)
    except ValueError:
        raise MalformedFrontmatter(path, "frontmatter block is not closed with '---'")

    try:
        metadata = handler.load(fm, Loader=FrontmatterLoader)
    except yaml.YAMLError as e:
        raise MalformedFrontmatter(path, f"invalid YAML: {e}")

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise MalformedFrontmatter(
            path, f"frontmatter must be a mapping, got {type(metadata).__name__}"
        )

    return {str(k): v for k, v in metadata.items()}, content.strip()


def parse_date(value, path: str) -> datetime.datetime:
    """Coerce a YAML date, timestamp or ISO 8601 string into an aware datetime (UTC if naive)."""
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        parsed = datetime.datetime.combine(value, datetime.time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.datetime.fromisoformat(value.strip())
        except ValueError:
            raise InvalidDate(path, value)
    else:
        raise InvalidDate(path, value)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def dump_post(post: Post) -> str:
    """Serialize a Post back into frontmatter + body text."""
    metadata: dict[str, Any] = {
        "title": post.title,
        "date": post.date.isoformat(),
        "draft": post.draft,
    }
    if post.tags:
        metadata["tags"] = list(post.tags)
    if post.categories:
        metadata["categories"] = list(post.categories)
    if post.author:
        metadata["author"] = post.author
    if post.description:
        metadata["description"] = post.description
    if post.url is not None:
        metadata["url"] = post.url
    if post.more_link is not None:
        metadata["more_link"] = post.more_link
    metadata.update(post.extra)

    document = frontmatter.Post(post.body)
    document.metadata.update(metadata)
    return frontmatter.dumps(document, handler=YAMLHandler()) + "\n"


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _as_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _as_optional_text(value):
    text = _as_text(value)
    return text or None
