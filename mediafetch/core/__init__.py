from .errors import (
    FilesystemFailure,
    MediaToolError,
    NoOutputFile,
    ParseFailure,
    ToolFailure,
    ToolTimeout,
)

__all__ = [
    "FilesystemFailure",
    "MediaToolError",
    "NoOutputFile",
    "ParseFailure",
    "ToolFailure",
    "ToolTimeout",
]
