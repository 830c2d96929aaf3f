from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from mediafetch.config.settings import config
from mediafetch.core.errors import MediaToolError, ToolFailure
from mediafetch.core.logging import get_client_ip, log_error, log_info
from mediafetch.models.request import DownloadRequest
from mediafetch.services.download import DownloadService
from mediafetch.services.info import VideoInfoService

router = APIRouter()


async def log_download_request(request: Request, video_request: DownloadRequest) -> None:
    """Log the download, with the title when metadata can still be fetched"""
    client_ip = get_client_ip(request)
    details = f"Type: {video_request.media_type.value}, FormatID: {video_request.format_id or ''}"

    title = None
    if config.ytdlp.log_download_titles:
        try:
            title = await VideoInfoService.fetch_title(video_request.url)
        except MediaToolError:
            title = None

    if title is not None:
        log_info(
            request,
            f"Download request - IP: {client_ip}, URL: {video_request.url}, Title: {title}, {details}",
            client_ip=client_ip,
            url=video_request.url,
            title=title
        )
    else:
        log_info(
            request,
            f"Download request - IP: {client_ip}, URL: {video_request.url}, {details}",
            client_ip=client_ip,
            url=video_request.url
        )


@router.post("/api/download")
async def download_media(request: Request, video_request: DownloadRequest):
    """Download with the external tool and stream the produced file"""

    await log_download_request(request, video_request)

    try:
        prepared = await DownloadService.prepare(video_request)
    except ToolFailure as e:
        exit_status = f"exit {e.returncode} - " if e.returncode is not None else ""
        log_error(request, f"Download error: {exit_status}{e.diagnostic or e.message}")
        raise
    except MediaToolError as e:
        log_error(request, f"Download error: {e.message}")
        raise

    log_info(request, f"Streaming {prepared.filename} ({prepared.size / 1024 / 1024:.1f} MB)")

    # Whichever of the stream's finally and the background task runs first
    # removes the workspace
    return StreamingResponse(
        prepared.stream(),
        media_type="application/octet-stream",
        headers=prepared.headers,
        background=BackgroundTask(prepared.release)
    )
