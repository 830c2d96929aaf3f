from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MediaType(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"


class DownloadRequest(BaseModel):
    """Body shared by the metadata and download endpoints"""
    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(..., description="Media URL")
    media_type: MediaType = Field(MediaType.VIDEO, alias="type", description="video or audio")
    format_id: Optional[str] = Field(None, alias="formatId", description="Format selector from video-info")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("url must not be empty")
        return v

    @field_validator("media_type", mode="before")
    @classmethod
    def default_media_type(cls, v):
        # The landing page posts an empty type for metadata lookups
        if v is None or v == "":
            return MediaType.VIDEO
        return v

    @field_validator("format_id", mode="before")
    @classmethod
    def empty_format_id(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
