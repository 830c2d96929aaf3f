from fastapi import APIRouter, Request
from mediafetch.core.errors import ParseFailure, ToolFailure, ToolTimeout
from mediafetch.core.logging import get_client_ip, log_error, log_info
from mediafetch.models.request import DownloadRequest
from mediafetch.models.response import MediaInfo
from mediafetch.services.info import VideoInfoService

router = APIRouter()

@router.post("/api/video-info", response_model=MediaInfo)
async def get_video_info(request: Request, video_request: DownloadRequest):
    """Title, duration and selectable video qualities for a URL"""

    try:
        video_info = await VideoInfoService.fetch(video_request.url)
    except ToolTimeout:
        log_error(request, f"Info request timed out - URL: {video_request.url}")
        raise
    except ParseFailure as e:
        log_error(request, f"Unusable metadata for {video_request.url}: {e.diagnostic[:200]}")
        raise ParseFailure() from e
    except ToolFailure as e:
        log_error(request, f"Info lookup failed for {video_request.url}: {e.diagnostic[:200]}")
        raise ToolFailure("Failed to get video info") from e

    log_info(
        request,
        f"Info request - IP: {get_client_ip(request)}, URL: {video_request.url}, Title: {video_info.title}",
        client_ip=get_client_ip(request),
        url=video_request.url,
        title=video_info.title
    )
    return video_info
