"""
Filename extraction from the Content-Disposition response header.

Precedence:
    1. ``filename*=UTF-8''<percent-encoded>`` (RFC 5987 extended form)
    2. ``filename="<name>"`` or ``filename=<name>``
    3. the caller's default

The extended form always wins when both are present.
"""
import logging
import re
from typing import Any, Mapping, Optional
from urllib.parse import unquote

from ..models import DEFAULT_FILENAME

logger = logging.getLogger(__name__)

HEADER_NAME = "content-disposition"

_EXTENDED_FILENAME = re.compile(r"filename\*=UTF-8''([^;\n\r]+)", re.IGNORECASE)
_PLAIN_FILENAME = re.compile(r"filename\s*=\s*\"?([^\";]+)\"?", re.IGNORECASE)
_STRAY_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _header_value(headers: Mapping[str, Any], name: str) -> Optional[str]:
    """Case-insensitive header lookup that also works on plain dicts."""
    value = headers.get(name)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == name:
                value = candidate
                break
    return value


def parse_filename(value: Optional[str]) -> Optional[str]:
    """
    Return the decoded filename carried by a Content-Disposition value.

    Returns None when the header is absent or names no file. A "%" not
    followed by two hex digits raises ValueError; percent sequences that
    are not valid UTF-8 raise UnicodeDecodeError.
    """
    if not value:
        return None

    match = _EXTENDED_FILENAME.search(value) or _PLAIN_FILENAME.search(value)
    if not match:
        return None

    raw = match.group(1).strip()
    if not raw:
        return None
    if _STRAY_PERCENT.search(raw):
        raise ValueError(f"malformed percent-encoding in filename: {raw!r}")
    return unquote(raw, errors="strict")


def filename_from_headers(
    headers: Mapping[str, Any],
    default: str = DEFAULT_FILENAME,
) -> str:
    """Resolve the download filename from response headers."""
    filename = parse_filename(_header_value(headers, HEADER_NAME))
    if not filename:
        logger.debug("No filename in Content-Disposition, using %s", default)
        return default
    return filename
