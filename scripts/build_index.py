#!/usr/bin/env python3
"""
Build the content index for a directory of Markdown posts.

Reports every per-file problem as a warning, optionally writes a JSON
manifest of the published listing, and can list draft posts.

    python scripts/build_index.py content/post --output public/posts.json
    python scripts/build_index.py content/post --check-drafts
"""

import argparse
import logging
import sys

from blogindex.errors import ContentRootNotFound
from blogindex.services.content_loader import load_posts
from blogindex.services.index_builder import build_index
from blogindex.services.manifest import build_manifest, find_drafts, write_manifest
from blogindex.settings import settings

logger = logging.getLogger("build_index")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        "content_dir",
        nargs="?",
        default=settings.CONTENT_DIR,
        help="Directory of .md posts (default: CONTENT_DIR)",
    )
    parser.add_argument("--output", "-o", help="Write a JSON manifest here")
    parser.add_argument(
        "--include-future",
        action="store_true",
        default=settings.INCLUDE_FUTURE,
        help="Publish posts dated in the future",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any file was rejected",
    )
    parser.add_argument(
        "--check-drafts",
        action="store_true",
        help="List draft posts",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        loaded = load_posts(args.content_dir, max_workers=settings.max_workers)
    except ContentRootNotFound as e:
        logger.error(str(e))
        return 2

    if args.check_drafts:
        drafts = find_drafts(loaded)
        if drafts:
            logger.info(f"Draft content found ({len(drafts)}):")
            for path in drafts:
                logger.info(f"  {path}")
        else:
            logger.info("No draft content found")

    index = build_index(
        loaded.posts, loaded.diagnostics, include_future=args.include_future
    )

    if args.output:
        write_manifest(build_manifest(index, settings.SUMMARY_WORDS), args.output)

    if index.diagnostics:
        logger.warning(f"{len(index.diagnostics)} problems found:")
        for diagnostic in index.diagnostics:
            logger.warning(f"  [{diagnostic.kind}] {diagnostic.path}: {diagnostic.message}")
        if args.strict:
            return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    sys.exit(main())
