"""Services for crud_uploader module."""
from .api_client import HTTPGenerationClient
from .content_disposition import filename_from_headers, parse_filename
from .download import DirectoryDownloadTarget
from .status import StatusBoard

__all__ = [
    "HTTPGenerationClient",
    "DirectoryDownloadTarget",
    "StatusBoard",
    "filename_from_headers",
    "parse_filename",
]
