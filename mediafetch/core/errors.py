from typing import Optional


class MediaToolError(Exception):
    """Base error for failures surfaced to the client as a plain-text response"""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ToolFailure(MediaToolError):
    """External tool could not be run or exited non-zero"""
    default_message = "External tool failed"

    def __init__(
        self,
        message: Optional[str] = None,
        diagnostic: str = "",
        returncode: Optional[int] = None
    ):
        super().__init__(message)
        self.diagnostic = diagnostic
        self.returncode = returncode


class ParseFailure(ToolFailure):
    """Tool output was not the expected JSON document"""
    default_message = "Failed to parse video info"


class ToolTimeout(ToolFailure):
    status_code = 504
    default_message = "External tool timed out"


class NoOutputFile(MediaToolError):
    default_message = "Failed to locate downloaded file"


class FilesystemFailure(MediaToolError):
    default_message = "Filesystem operation failed"
