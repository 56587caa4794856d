"""Use cases for turning form state into a request."""
from __future__ import annotations

from typing import Optional

from crud_uploader.models import (
    OVERRIDES_FIELD,
    PROJECT_NAME_FIELD,
    SQL_FIELD,
    FilePart,
    MultipartPayload,
    StatusMessage,
    SubmissionInput,
)


class ValidateSubmissionUseCase:
    """Check required inputs; return the first problem as a status text."""

    @staticmethod
    def execute(form: SubmissionInput) -> Optional[str]:
        if form.sql_file is None:
            return StatusMessage.MISSING_SQL_FILE
        if not form.trimmed_project_name:
            return StatusMessage.MISSING_PROJECT_NAME
        return None


class BuildMultipartPayloadUseCase:
    """Map a validated submission onto the endpoint's multipart fields."""

    @staticmethod
    def _file_field(part: FilePart):
        return (part.name, part.content, part.content_type)

    def execute(self, form: SubmissionInput) -> MultipartPayload:
        if form.sql_file is None:
            raise ValueError("sql file is required")

        files = [(SQL_FIELD, self._file_field(form.sql_file))]
        if form.overrides_file is not None:
            files.append((OVERRIDES_FIELD, self._file_field(form.overrides_file)))

        return MultipartPayload(
            files=files,
            data={PROJECT_NAME_FIELD: form.trimmed_project_name},
        )
