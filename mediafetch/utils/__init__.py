from .duration import format_duration
from .filename import content_disposition

__all__ = ["content_disposition", "format_duration"]
