import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from blogindex import dependencies as deps
from blogindex.schemas.blog import PostDetail, PostPage, TermDetail, TermSummary
from blogindex.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=PostPage)
def list_posts(
    page: int = Query(1, ge=1),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get one page of published posts, newest first."""
    try:
        result = service.list_posts(page)
        if result is None:
            raise HTTPException(status_code=404, detail="Page not found")
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug:path}", response_model=PostDetail)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug or permalink."""
    try:
        post = service.get_post(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/tags", response_model=List[TermSummary])
def list_tags(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.list_tags()
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")


@router.get("/tags/{tag}", response_model=TermDetail)
def get_tag(tag: str, service: PostsService = Depends(deps.get_posts_service)):
    try:
        group = service.get_tag(tag)
        if not group:
            raise HTTPException(status_code=404, detail="Tag not found")
        return group
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving tag {tag}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tag")


@router.get("/categories", response_model=List[TermSummary])
def list_categories(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.list_categories()
    except Exception as e:
        logger.error(f"Unexpected error listing categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve categories")


@router.get("/categories/{category}", response_model=TermDetail)
def get_category(
    category: str, service: PostsService = Depends(deps.get_posts_service)
):
    try:
        group = service.get_category(category)
        if not group:
            raise HTTPException(status_code=404, detail="Category not found")
        return group
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving category {category}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve category")
