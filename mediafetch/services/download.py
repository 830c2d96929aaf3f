import logging
import os
import shutil
import tempfile
from contextlib import ExitStack, contextmanager
from typing import AsyncIterator, Dict, Iterator

import aiofiles

from mediafetch.config.settings import config
from mediafetch.core.errors import FilesystemFailure
from mediafetch.models.request import DownloadRequest
from mediafetch.services.ytdlp import MediaTool
from mediafetch.utils.filename import content_disposition

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "mediafetch-"


@contextmanager
def download_workspace() -> Iterator[str]:
    """Exclusively owned temporary directory, removed with its contents on exit"""
    try:
        path = tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=config.download.temp_dir)
    except OSError as e:
        raise FilesystemFailure("Failed to create temporary directory") from e

    try:
        yield path
    finally:
        # Synchronous so that removal cannot be interrupted by task cancellation
        shutil.rmtree(path, ignore_errors=True)
        logger.debug(f"Removed workspace {path}")


class PreparedDownload:
    """A finished download whose workspace is released once streaming ends"""

    def __init__(self, path: str, size: int, cleanup: ExitStack):
        self.path = path
        self.size = size
        self.filename = os.path.basename(path)
        self._cleanup = cleanup

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Disposition": content_disposition(self.filename),
            "Content-Length": str(self.size),
        }

    async def stream(self) -> AsyncIterator[bytes]:
        try:
            async with aiofiles.open(self.path, "rb") as f:
                while True:
                    chunk = await f.read(config.download.chunk_size)
                    if not chunk:
                        break
                    yield chunk
        finally:
            self.release()

    def release(self) -> None:
        # Idempotent: the first close empties the stack
        self._cleanup.close()


class DownloadService:
    """Video download service"""

    @staticmethod
    async def prepare(video_request: DownloadRequest) -> PreparedDownload:
        """
        Download into a fresh workspace.
        On failure the workspace is removed before the error propagates; on
        success its ownership moves to the returned PreparedDownload.
        """
        with ExitStack() as stack:
            workspace = stack.enter_context(download_workspace())
            path = await MediaTool.download_media(
                video_request.url,
                video_request.media_type,
                video_request.format_id,
                workspace
            )
            try:
                size = os.path.getsize(path)
            except OSError as e:
                raise FilesystemFailure("Failed to open downloaded file") from e

            return PreparedDownload(path, size, stack.pop_all())
