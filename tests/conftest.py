import datetime
import textwrap
from pathlib import Path

import pytest

from blogindex.schemas.post import Post


def make_post(path: str, date="2024-01-01", **fields) -> Post:
    """Build a Post directly; `date` may be an ISO string or a datetime."""
    if isinstance(date, str):
        date = datetime.datetime.fromisoformat(date).replace(tzinfo=datetime.timezone.utc)
    fields.setdefault("title", Path(path).stem.replace("-", " ").title())
    return Post(path=path, date=date, **fields)


def write_post(root: Path, rel_path: str, text: str) -> Path:
    target = root / rel_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return target


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """
    Small content tree: two published posts sharing a tag, a draft, a file
    without a date and a template file that must be skipped.
    """
    root = tmp_path / "content"
    write_post(
        root,
        "post/kubernetes-upgrades.md",
        """
        ---
        title: "Kubernetes Upgrades"
        date: 2024-03-01T09:00:00-05:00
        draft: false
        tags: ["Kubernetes", "RKE2"]
        categories: ["Kubernetes", "Operations"]
        author: "Matthew Mattox - mmattox@support.tools"
        description: "Upgrading clusters without downtime"
        more_link: "yes"
        socialMedia:
          twitter: cube8021
        ---
        Upgrading a cluster is mostly about draining nodes.
        <!--more-->
        # Steps

        Drain, upgrade, uncordon.
        """,
    )
    write_post(
        root,
        "post/linux-tuning.md",
        """
        ---
        title: Linux Tuning
        date: 2024-02-01
        tags: [linux, kubernetes]
        categories: [Linux]
        ---
        Sysctl knobs worth knowing.
        """,
    )
    write_post(
        root,
        "post/draft-post.md",
        """
        ---
        title: Work In Progress
        date: 2024-04-01
        draft: true
        tags: [kubernetes]
        ---
        Not ready.
        """,
    )
    write_post(
        root,
        "post/no-date.md",
        """
        ---
        title: Undated
        ---
        Missing its date.
        """,
    )
    write_post(
        root,
        "post/_template.md",
        """
        ---
        title: Template
        date: 2020-01-01
        draft: true
        ---
        """,
    )
    return root


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        list_posts_return=None,
        get_post_return=None,
        tags=None,
        tag_return=None,
    ):
        self._list_posts_return = list_posts_return
        self._get_post_return = get_post_return
        self._tags = tags or []
        self._tag_return = tag_return
        self.calls = []

    def list_posts(self, page: int = 1):
        self.calls.append(("list_posts", page))
        return self._list_posts_return

    def get_post(self, slug: str):
        self.calls.append(("get_post", slug))
        return self._get_post_return

    def list_tags(self):
        return self._tags

    def get_tag(self, tag: str):
        self.calls.append(("get_tag", tag))
        return self._tag_return

    def list_categories(self):
        return self._tags

    def get_category(self, category: str):
        self.calls.append(("get_category", category))
        return self._tag_return
