"""
crud_uploader - submit a SQL schema to a CRUD project generator and save
the returned ZIP archive.

Usage:
    from crud_uploader import GenerationOrchestrator, GeneratorConfig

    config = GeneratorConfig(base_url="http://localhost:8080", output_dir="out")
    async with GenerationOrchestrator(config) as generator:
        await generator.submit_paths("schema.sql", "shop", "overrides.json")
        print(generator.status.message)  # "Download started"

    # Wiring the workflow by hand (e.g. with test doubles)
    workflow = UploadWorkflow(endpoint, status_sink, download_target)
    await workflow.handle_submit(SubmissionInput.from_paths("schema.sql", "shop"))
"""
from .orchestrator import GenerationOrchestrator, UploadWorkflow
from .models import (
    FilePart,
    GenerationResponse,
    GenerationStatus,
    GeneratorConfig,
    MultipartPayload,
    StatusMessage,
    SubmissionInput,
)
from .services import (
    DirectoryDownloadTarget,
    HTTPGenerationClient,
    StatusBoard,
    filename_from_headers,
)

__version__ = "0.1.0"
__all__ = [
    # Main
    "GenerationOrchestrator",
    "UploadWorkflow",
    # Models
    "FilePart",
    "GenerationResponse",
    "GenerationStatus",
    "GeneratorConfig",
    "MultipartPayload",
    "StatusMessage",
    "SubmissionInput",
    # Services
    "DirectoryDownloadTarget",
    "HTTPGenerationClient",
    "StatusBoard",
    "filename_from_headers",
]
