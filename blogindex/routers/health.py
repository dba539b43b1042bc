from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from blogindex.schemas.blog import VersionInfo
from blogindex.security import get_settings
from blogindex.settings import Settings

router = APIRouter()


@router.get("/healthz", response_class=PlainTextResponse)
def healthz():
    return "ok"


@router.get("/version", response_model=VersionInfo)
def version(current_settings: Settings = Depends(get_settings)):
    return VersionInfo(
        version=current_settings.VERSION,
        gitCommit=current_settings.GIT_COMMIT,
        buildTime=current_settings.BUILD_TIME,
    )
