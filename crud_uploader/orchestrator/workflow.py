"""Submit workflow: validate, upload, classify the response, deliver the ZIP."""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..models import (
    DEFAULT_FILENAME,
    GenerationResponse,
    StatusMessage,
    SubmissionInput,
)
from ..protocols import IDownloadTarget, IGenerationEndpoint, IStatusSink
from ..services.content_disposition import filename_from_headers
from ..use_cases.submission import BuildMultipartPayloadUseCase, ValidateSubmissionUseCase

logger = logging.getLogger(__name__)


def _describe_exception(exc: Exception) -> str:
    message = str(exc).strip()
    if message:
        return message
    return f"{type(exc).__name__}: {repr(exc)}"


async def _read_error_text(response: httpx.Response) -> str:
    """Body text of a failed response; empty when the server sent none."""
    await response.aread()
    return response.text


class UploadWorkflow:
    """
    Drives one submit cycle end to end.

    Each call to ``handle_submit`` is independent: the workflow keeps no
    per-cycle state, and its outcome is observable only through the status
    sink and the download target.
    """

    def __init__(
        self,
        endpoint: IGenerationEndpoint,
        status: IStatusSink,
        downloads: IDownloadTarget,
        default_filename: str = DEFAULT_FILENAME,
        validate: Optional[ValidateSubmissionUseCase] = None,
        build_payload: Optional[BuildMultipartPayloadUseCase] = None,
    ):
        self._endpoint = endpoint
        self._status = status
        self._downloads = downloads
        self._default_filename = default_filename
        self._validate = validate or ValidateSubmissionUseCase()
        self._build_payload = build_payload or BuildMultipartPayloadUseCase()

    async def handle_submit(self, form: SubmissionInput) -> None:
        self._status.update(StatusMessage.PREPARING)

        problem = self._validate.execute(form)
        if problem:
            self._status.update(problem)
            return

        try:
            payload = self._build_payload.execute(form)

            self._status.update(StatusMessage.UPLOADING)
            async with self._endpoint.submit(payload) as response:
                result = await self._read_response(response)

            if not result.success:
                self._status.update(StatusMessage.server_error(result.status_code, result.message))
                return

            saved = self._downloads.deliver(result.body, result.filename)
            logger.debug("Archive delivered to %s", saved)
            self._status.update(StatusMessage.DOWNLOAD_STARTED)
        except Exception as exc:
            logger.exception("Submit failed")
            self._status.update(StatusMessage.error(_describe_exception(exc)))

    async def _read_response(self, response: httpx.Response) -> GenerationResponse:
        if not response.is_success:
            text = await _read_error_text(response)
            return GenerationResponse.fail(response.status_code, text or response.reason_phrase)

        self._status.update(StatusMessage.GENERATING)
        body = await response.aread()
        filename = filename_from_headers(response.headers, self._default_filename)
        return GenerationResponse.ok(body, filename, response.status_code)
