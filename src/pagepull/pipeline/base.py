"""Base classes for the export pipeline architecture."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Protocol, runtime_checkable

from ..models.config import RenderOptions
from ..models.content import ContentDocument
from ..models.events import EventType, ExportEvent
from ..rendering.base import OutputFormat

# Type alias for event emitter function
EventEmitter = Callable[[ExportEvent], None]


@dataclass
class PageContext:
    """
    Context object passed through pipeline steps.

    Contains all state for exporting a single page, accumulated
    as it moves through the pipeline.

    Attributes:
        url: The URL being exported
        output_path: Target path for the output file
        output_format: Resolved output format
        options: Render options (footer, page size, margins)
        html: Raw HTML content (bytes to avoid encoding issues)
        document: Extracted content document
        rendered: Rendered text payload
    """

    url: str
    output_path: Path
    output_format: OutputFormat = OutputFormat.MARKDOWN
    options: RenderOptions = field(default_factory=RenderOptions)

    # Content (accumulated through pipeline)
    html: Optional[bytes] = None
    document: Optional[ContentDocument] = None
    rendered: Optional[str] = None

    # Additional data from fetch
    status_code: Optional[int] = None
    content_type: Optional[str] = None
    bytes_downloaded: int = 0

    # Extraction statistics
    duplicates_dropped: int = 0


@runtime_checkable
class ExportStep(Protocol):
    """
    Protocol for pipeline steps.

    Each step receives a PageContext, processes it, and returns
    the (possibly modified) context.

    Error Handling Contract:
    - A step that fails logs the error, emits a failure event
      and re-raises
    - The pipeline re-raises to its caller; nothing is written after
      a failed step

    Example implementation:
        class UppercaseStep:
            name = "uppercase"

            async def execute(
                self,
                ctx: PageContext,
                emit: Optional[EventEmitter] = None
            ) -> PageContext:
                ctx.rendered = ctx.rendered.upper()
                return ctx
    """

    name: str

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        """
        Execute this pipeline step.

        Args:
            ctx: The page context with accumulated state
            emit: Optional callback to emit events

        Returns:
            The (possibly modified) page context
        """
        ...


@dataclass
class ExportPipeline:
    """
    Pipeline for exporting a single page through multiple steps.

    Steps are executed in order. If a step raises, a FAILED event is
    emitted and the exception propagates to the caller.

    Example:
        pipeline = ExportPipeline(steps=[
            FetchStep(http_client),
            ExtractStep(builder),
            RenderStep(),
            SaveStep(),
        ])

        ctx = await pipeline.execute(
            url, Path("page.md"), OutputFormat.MARKDOWN, RenderOptions(), emit=log_event
        )
    """

    steps: list[ExportStep]

    async def execute(
        self,
        url: str,
        output_path: Path,
        output_format: OutputFormat = OutputFormat.MARKDOWN,
        options: Optional[RenderOptions] = None,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        """
        Execute the pipeline for a URL.

        Args:
            url: The URL to export
            output_path: Where to write the output
            output_format: Resolved output format
            options: Render options
            emit: Optional callback for emitting events

        Returns:
            PageContext with final state

        Raises:
            Exception: Whatever the failing step raised
        """
        ctx = PageContext(
            url=url,
            output_path=output_path,
            output_format=output_format,
            options=options or RenderOptions(),
        )

        if emit:
            emit(ExportEvent(type=EventType.STARTED, url=url, output_format=output_format.value))

        for step in self.steps:
            try:
                ctx = await step.execute(ctx, emit)
            except Exception as e:
                if emit:
                    emit(
                        ExportEvent(
                            type=EventType.FAILED,
                            url=url,
                            error=f"{step.name}: {e}",
                        )
                    )
                raise

        if emit:
            emit(
                ExportEvent(
                    type=EventType.COMPLETED,
                    url=url,
                    output_format=output_format.value,
                    output_path=ctx.output_path,
                )
            )

        return ctx

    def add_step(self, step: ExportStep) -> "ExportPipeline":
        """
        Add a step to the pipeline (fluent API).

        Args:
            step: The step to add

        Returns:
            Self for chaining
        """
        self.steps.append(step)
        return self
