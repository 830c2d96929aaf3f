import logging

from pydantic import ValidationError

from mediafetch.core.errors import ParseFailure
from mediafetch.models.internal import RawMediaDocument
from mediafetch.models.response import MediaInfo
from mediafetch.services.format import FormatNormalizer
from mediafetch.services.ytdlp import MediaTool
from mediafetch.utils.duration import format_duration

logger = logging.getLogger(__name__)


class VideoInfoService:
    """Video info fetching service"""

    @staticmethod
    def parse_document(document: dict) -> RawMediaDocument:
        try:
            return RawMediaDocument.model_validate(document)
        except ValidationError as e:
            logger.warning(f"Metadata document rejected: {e.error_count()} invalid field(s)")
            raise ParseFailure(diagnostic=str(e)) from e

    @staticmethod
    def build(document: dict) -> MediaInfo:
        """Shape a raw metadata document into the compact response"""
        parsed = VideoInfoService.parse_document(document)
        return MediaInfo(
            title=parsed.title,
            duration=format_duration(parsed.duration),
            formats=FormatNormalizer.normalize(parsed.formats)
        )

    @staticmethod
    async def fetch(url: str) -> MediaInfo:
        document = await MediaTool.fetch_metadata(url)
        return VideoInfoService.build(document)

    @staticmethod
    async def fetch_title(url: str) -> str:
        document = await MediaTool.fetch_metadata(url)
        return VideoInfoService.parse_document(document).title
