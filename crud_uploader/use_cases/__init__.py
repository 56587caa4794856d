"""Application use cases for crud_uploader workflows."""

from .submission import BuildMultipartPayloadUseCase, ValidateSubmissionUseCase

__all__ = [
    "BuildMultipartPayloadUseCase",
    "ValidateSubmissionUseCase",
]
