"""Orchestrator package - coordinates the submit workflow."""
from .core import GenerationOrchestrator
from .workflow import UploadWorkflow

__all__ = ["GenerationOrchestrator", "UploadWorkflow"]
