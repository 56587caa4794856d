"""Core orchestrator - wires the HTTP client, status sink and download target."""
from pathlib import Path
from typing import Optional, Union

import httpx

from ..models import GeneratorConfig, SubmissionInput
from ..protocols import IDownloadTarget, IStatusSink
from ..services.api_client import HTTPGenerationClient
from ..services.download import DirectoryDownloadTarget
from ..services.status import StatusBoard
from .workflow import UploadWorkflow


class GenerationOrchestrator:
    """
    Owns the services one or more submit cycles need.

    Usage:
        async with GenerationOrchestrator(config) as generator:
            await generator.submit_paths("schema.sql", "shop")
            print(generator.status.message)
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        status: Optional[IStatusSink] = None,
        downloads: Optional[IDownloadTarget] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize orchestrator with dependencies.

        Args:
            config: Generator configuration (defaults to GeneratorConfig())
            status: Status sink; a StatusBoard is created if omitted
            downloads: Download target; defaults to config.output_dir
            transport: Optional httpx transport, mainly for tests
        """
        self._config = config or GeneratorConfig()
        self._status = status or StatusBoard()
        self._downloads = downloads or DirectoryDownloadTarget(
            self._config.output_dir, self._config.default_filename
        )
        self._transport = transport

        # Initialized in __aenter__
        self._api_client: Optional[HTTPGenerationClient] = None
        self._workflow: Optional[UploadWorkflow] = None

    @property
    def status(self) -> IStatusSink:
        return self._status

    @property
    def downloads(self) -> IDownloadTarget:
        return self._downloads

    async def __aenter__(self):
        self._api_client = HTTPGenerationClient(
            self._config.base_url,
            endpoint=self._config.endpoint,
            timeout=self._config.timeout,
            transport=self._transport,
        )
        await self._api_client.__aenter__()

        self._workflow = UploadWorkflow(
            self._api_client,
            self._status,
            self._downloads,
            default_filename=self._config.default_filename,
        )
        return self

    async def __aexit__(self, *args):
        if self._api_client:
            await self._api_client.__aexit__(*args)

    async def submit(self, form: SubmissionInput) -> None:
        """Run one submit cycle."""
        assert self._workflow is not None
        await self._workflow.handle_submit(form)

    async def submit_paths(
        self,
        sql_path: Optional[Union[str, Path]],
        project_name: Optional[str],
        overrides_path: Optional[Union[str, Path]] = None,
    ) -> None:
        """Read the files from disk and run one submit cycle."""
        await self.submit(SubmissionInput.from_paths(sql_path, project_name, overrides_path))
