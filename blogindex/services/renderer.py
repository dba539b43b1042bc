import markdown
from pydantic import BaseModel

from blogindex.schemas.post import Post

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc"]


class RenderedPost(BaseModel):
    summary_html: str
    content_html: str


def render_markdown(text: str) -> str:
    """Render Markdown to HTML."""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def render_post(post: Post) -> RenderedPost:
    # The summary break is an HTML comment, so the full body renders as-is.
    return RenderedPost(
        summary_html=render_markdown(post.summary),
        content_html=render_markdown(post.body),
    )
