from typing import List

from pydantic import BaseModel, ConfigDict, Field


class FormatOption(BaseModel):
    """One selectable video quality"""
    model_config = ConfigDict(populate_by_name=True)

    format_id: str = Field(..., alias="formatId")
    quality: str
    ext: str


class MediaInfo(BaseModel):
    """Video information response"""
    title: str
    duration: str
    formats: List[FormatOption] = []
