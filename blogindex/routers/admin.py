import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from blogindex import dependencies as deps
from blogindex.schemas.index import ContentIndex
from blogindex.schemas.post import Diagnostic
from blogindex.security import get_settings
from blogindex.services.content_loader import build_site_from_settings
from blogindex.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/diagnostics", response_model=List[Diagnostic])
def list_diagnostics(index: ContentIndex = Depends(deps.get_content_index)):
    """Problems found in the last build."""
    return list(index.diagnostics)


@router.post("/reload")
def reload_content(
    request: Request,
    current_settings: Settings = Depends(get_settings),
):
    """Rebuild the content index from disk and swap it in."""
    try:
        index = build_site_from_settings(current_settings)
    except Exception as e:
        logger.error(f"Failed to rebuild content index: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to rebuild index")

    request.app.state.content_index = index
    logger.info(f"Content index reloaded with {len(index.posts)} posts")
    return {"posts": len(index.posts), "diagnostics": len(index.diagnostics)}
