from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, field_validator


class RawFormat(BaseModel):
    """Format record as dumped by the external tool"""
    model_config = ConfigDict(extra="ignore")

    format_id: str
    ext: str
    vcodec: Optional[str] = None
    acodec: Optional[str] = None
    height: Optional[FiniteFloat] = None
    format_note: Optional[str] = None

    @field_validator("height", mode="before")
    @classmethod
    def drop_non_numeric_height(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        return v

    @field_validator("vcodec", "acodec", "format_note", mode="before")
    @classmethod
    def drop_non_string(cls, v):
        return v if isinstance(v, str) else None


class RawMediaDocument(BaseModel):
    """Top-level metadata document; only the fields we use are checked"""
    model_config = ConfigDict(extra="ignore")

    title: str
    duration: float = Field(strict=True, allow_inf_nan=False)
    formats: List[Dict[str, Any]] = []
