import re
from typing import Any, Iterable, List

from pydantic import ValidationError

from mediafetch.core.errors import ParseFailure
from mediafetch.models.internal import RawFormat
from mediafetch.models.response import FormatOption

UNKNOWN_QUALITY = "Unknown"
_QUALITY_RE = re.compile(r"^\s*([+-]?\d+)p")


def quality_label(record: RawFormat) -> str:
    """'{height}p', else the tool's format note, else 'Unknown'"""
    if record.height is not None:
        return f"{int(record.height)}p"
    if record.format_note is not None:
        return record.format_note
    return UNKNOWN_QUALITY


def quality_value(label: str) -> int:
    """Numeric resolution of a '{N}p' label; anything else counts as 0"""
    match = _QUALITY_RE.match(label)
    return int(match.group(1)) if match else 0


class FormatNormalizer:
    """Turn raw format records into the user-facing quality list"""

    @staticmethod
    def normalize(raw_formats: Iterable[Any]) -> List[FormatOption]:
        options: List[FormatOption] = []
        seen = set()

        for raw in raw_formats:
            if not isinstance(raw, dict):
                raise ParseFailure(diagnostic="Format record is not an object")

            # Audio-only tracks are offered separately by the audio download
            if raw.get("vcodec") == "none":
                continue

            try:
                record = RawFormat.model_validate(raw)
            except ValidationError as e:
                raise ParseFailure(diagnostic=str(e)) from e

            quality = quality_label(record)
            if quality in seen:
                continue
            seen.add(quality)

            options.append(FormatOption(
                format_id=record.format_id,
                quality=quality,
                ext=record.ext
            ))

        # sorted() is stable with reverse=True, so ties keep input order
        return sorted(options, key=lambda o: quality_value(o.quality), reverse=True)
