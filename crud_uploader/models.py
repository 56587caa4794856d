"""
Models for crud_uploader module.

Immutable dataclasses describing one submit cycle: what the user picked,
what goes over the wire, and what came back.
"""
import mimetypes
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union


DEFAULT_API_URL = "http://localhost:8080"
UPLOAD_ENDPOINT = "/api/generate/upload"
DEFAULT_FILENAME = "auto-crud.zip"

# Multipart field names expected by the generation endpoint
SQL_FIELD = "sql"
OVERRIDES_FIELD = "overrides"
PROJECT_NAME_FIELD = "project-name"


@dataclass(frozen=True)
class FilePart:
    """Named binary blob selected by the user."""
    name: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FilePart":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )


@dataclass(frozen=True)
class SubmissionInput:
    """Form state captured at the moment of submission."""
    sql_file: Optional[FilePart]
    project_name: str = ""
    overrides_file: Optional[FilePart] = None

    @classmethod
    def from_paths(
        cls,
        sql_path: Optional[Union[str, Path]],
        project_name: Optional[str],
        overrides_path: Optional[Union[str, Path]] = None,
    ) -> "SubmissionInput":
        """Read the chosen files from disk. ``None`` means nothing was chosen."""
        return cls(
            sql_file=FilePart.from_path(sql_path) if sql_path else None,
            project_name=project_name or "",
            overrides_file=FilePart.from_path(overrides_path) if overrides_path else None,
        )

    @property
    def trimmed_project_name(self) -> str:
        return (self.project_name or "").strip()


@dataclass(frozen=True)
class MultipartPayload:
    """Request body in the shape httpx expects for ``files=`` and ``data=``."""
    files: List[Tuple[str, Tuple[str, bytes, str]]] = field(default_factory=list)
    data: Dict[str, str] = field(default_factory=dict)

    @property
    def field_names(self) -> List[str]:
        return [name for name, _ in self.files] + list(self.data)


class GenerationStatus(Enum):
    """Outcome of one request/response cycle."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class GenerationResponse:
    """Immutable classification of the endpoint's response."""
    status: GenerationStatus
    body: bytes = b""
    filename: str = ""
    status_code: Optional[int] = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.status == GenerationStatus.SUCCESS

    @classmethod
    def ok(cls, body: bytes, filename: str, status_code: int = 200):
        return cls(
            status=GenerationStatus.SUCCESS,
            body=body,
            filename=filename,
            status_code=status_code,
        )

    @classmethod
    def fail(cls, status_code: int, message: str):
        return cls(
            status=GenerationStatus.FAILED,
            status_code=status_code,
            message=message,
        )


class StatusMessage:
    """Texts shown on the status surface."""
    PREPARING = "Preparing..."
    MISSING_SQL_FILE = "Please select a SQL file."
    MISSING_PROJECT_NAME = "Please enter a project name."
    UPLOADING = "Uploading..."
    GENERATING = "Generating ZIP..."
    DOWNLOAD_STARTED = "Download started"

    @staticmethod
    def server_error(status_code: int, detail: str) -> str:
        return f"Server error: {status_code} - {detail}"

    @staticmethod
    def error(detail: Any) -> str:
        return f"Error: {detail}"


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable configuration for the generation client."""
    base_url: str = DEFAULT_API_URL
    endpoint: str = UPLOAD_ENDPOINT
    default_filename: str = DEFAULT_FILENAME
    output_dir: Path = Path(".")
    timeout: Optional[float] = None  # None waits indefinitely

    @classmethod
    def from_env(cls, **overrides) -> "GeneratorConfig":
        """
        Build config from CRUD_UPLOADER_* environment variables.

        Keyword overrides that are not None win over the environment.
        """
        values: Dict[str, Any] = {}

        api_url = os.getenv("CRUD_UPLOADER_API_URL")
        if api_url:
            values["base_url"] = api_url

        output_dir = os.getenv("CRUD_UPLOADER_OUTPUT_DIR")
        if output_dir:
            values["output_dir"] = Path(output_dir)

        timeout = os.getenv("CRUD_UPLOADER_TIMEOUT")
        if timeout:
            try:
                values["timeout"] = float(timeout)
            except ValueError as exc:
                raise ValueError(f"CRUD_UPLOADER_TIMEOUT must be a number, got {timeout!r}") from exc

        values.update({key: value for key, value in overrides.items() if value is not None})
        if "output_dir" in values:
            values["output_dir"] = Path(values["output_dir"])
        return cls(**values)
