"""Shared fixtures and test doubles."""
from contextlib import asynccontextmanager
from typing import List, Optional

import httpx
import pytest

from crud_uploader.models import FilePart, MultipartPayload, SubmissionInput
from crud_uploader.services.status import StatusBoard


class FakeEndpoint:
    """Generation endpoint double that replays a canned response."""

    def __init__(self, response: Optional[httpx.Response] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.payloads: List[MultipartPayload] = []

    @asynccontextmanager
    async def submit(self, payload: MultipartPayload):
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        yield self.response


class BrokenStream(httpx.AsyncByteStream):
    """Response body that fails while being read."""

    async def __aiter__(self):
        raise httpx.ReadError("connection reset")
        yield b""  # pragma: no cover


class RecordingStatus(StatusBoard):
    """Status board that also remembers every transition."""

    def __init__(self):
        super().__init__()
        self.history: List[str] = []
        self.on_change(self.history.append)


@pytest.fixture
def status():
    return RecordingStatus()


@pytest.fixture
def make_endpoint():
    return FakeEndpoint


@pytest.fixture
def broken_stream():
    return BrokenStream


@pytest.fixture
def sql_part():
    return FilePart("schema.sql", b"CREATE TABLE users (id BIGINT PRIMARY KEY);", "application/sql")


@pytest.fixture
def valid_form(sql_part):
    return SubmissionInput(sql_file=sql_part, project_name="  shop  ")
