"""Pipeline architecture for export operations."""

from .base import EventEmitter, ExportPipeline, ExportStep, PageContext

__all__ = ["EventEmitter", "ExportPipeline", "ExportStep", "PageContext"]
