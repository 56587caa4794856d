"""
Protocols (Interfaces) for Dependency Inversion.

The workflow only talks to these capabilities, so tests can swap in doubles.
"""
from pathlib import Path
from typing import AsyncContextManager, Protocol, runtime_checkable

import httpx

from .models import MultipartPayload


@runtime_checkable
class IGenerationEndpoint(Protocol):
    """Interface for the remote generation endpoint."""

    def submit(self, payload: MultipartPayload) -> AsyncContextManager[httpx.Response]:
        """POST payload; yields a streamed response whose body is not read yet."""
        ...


@runtime_checkable
class IStatusSink(Protocol):
    """Interface for the surface that shows the latest status text."""

    def update(self, message: str) -> None:
        """Replace the displayed status."""
        ...


@runtime_checkable
class IDownloadTarget(Protocol):
    """Interface for handing a downloaded archive to the user."""

    def deliver(self, body: bytes, filename: str) -> Path:
        """Save body under filename and return where it ended up."""
        ...
