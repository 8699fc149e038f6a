"""Pipeline step for content extraction."""

import logging
from typing import Optional

from ...extraction.builder import ContentBuilder
from ...models.events import EventType, ExportEvent
from ..base import EventEmitter, PageContext

logger = logging.getLogger(__name__)


class ExtractStep:
    """
    Pipeline step that turns fetched HTML into a ContentDocument.

    Reads ctx.html, writes ctx.document and ctx.duplicates_dropped.

    Example:
        step = ExtractStep(ContentBuilder(ExtractionConfig(min_paragraph_length=10)))
        ctx = await step.execute(ctx, emit=callback)
    """

    name = "extract"

    def __init__(self, builder: Optional[ContentBuilder] = None):
        """
        Initialize the extract step.

        Args:
            builder: Content builder (uses default if None)
        """
        self._builder = builder or ContentBuilder()

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        if ctx.html is None:
            raise ValueError(f"No HTML content to extract for {ctx.url}")

        result = self._builder.build_with_stats(ctx.html, ctx.url, content_type=ctx.content_type)
        ctx.document = result.document
        ctx.duplicates_dropped = result.duplicates_dropped

        logger.info(
            f"Extracted {len(result.document.sections)} sections from {ctx.url} "
            f"({result.duplicates_dropped} duplicates dropped)"
        )

        if emit:
            emit(
                ExportEvent(
                    type=EventType.CONTENT_EXTRACTED,
                    url=ctx.url,
                    sections=len(result.document.sections),
                    duplicates_dropped=result.duplicates_dropped,
                    message=f"Extracted {result.document.title!r}",
                )
            )

        return ctx
