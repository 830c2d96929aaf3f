import re
import unicodedata
from urllib.parse import quote


def ascii_filename(name: str) -> str:
    """Closest ASCII rendition of name, usable inside a quoted header value"""
    name = unicodedata.normalize("NFKD", name)
    name = name.encode("ascii", "ignore").decode("ascii")
    name = re.sub(r'[\x00-\x1f\x7f"\\]', '_', name).strip()
    return name or "download"


def content_disposition(filename: str) -> str:
    """Attachment header; non-ASCII names also get an RFC 5987 filename*"""
    fallback = ascii_filename(filename)
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
