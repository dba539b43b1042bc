from fastapi import Depends, Request

from blogindex.schemas.index import ContentIndex
from blogindex.security import get_settings
from blogindex.services.posts_service import PostsService


def get_content_index(request: Request) -> ContentIndex:
    return request.app.state.content_index


def get_posts_service(
    index=Depends(get_content_index),
    current_settings=Depends(get_settings),
):
    return PostsService(
        index=index,
        page_size=current_settings.PAGE_SIZE,
        summary_words=current_settings.SUMMARY_WORDS,
    )
