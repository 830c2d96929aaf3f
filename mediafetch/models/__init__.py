from .internal import RawFormat, RawMediaDocument
from .request import DownloadRequest, MediaType
from .response import FormatOption, MediaInfo

__all__ = [
    "DownloadRequest",
    "FormatOption",
    "MediaInfo",
    "MediaType",
    "RawFormat",
    "RawMediaDocument",
]
