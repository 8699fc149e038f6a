"""Pipeline step that prints the styled document to PDF."""

import logging
from typing import Optional

from ...models.events import EventType, ExportEvent
from ...rendering.pdf import Rasterizer
from ..base import EventEmitter, PageContext

logger = logging.getLogger(__name__)


class RasterizeStep:
    """
    Pipeline step that hands ctx.rendered (styled HTML) to a Rasterizer.

    Replaces SaveStep for PDF output. Failures surface as
    RasterizationError and leave no output file.
    """

    name = "rasterize"

    def __init__(self, rasterizer: Rasterizer) -> None:
        self._rasterizer = rasterizer

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        if ctx.rendered is None:
            raise ValueError(f"No rendered document to rasterize for {ctx.url}")

        try:
            ctx.output_path = await self._rasterizer.rasterize(ctx.rendered, ctx.output_path, ctx.options)
        except Exception as e:
            logger.error(f"Rasterization failed for {ctx.url}: {e}")
            raise

        logger.info(f"Saved: {ctx.output_path}")

        if emit:
            emit(
                ExportEvent(
                    type=EventType.DOCUMENT_SAVED,
                    url=ctx.url,
                    output_path=ctx.output_path,
                    output_format=ctx.output_format.value,
                    message=f"Saved to {ctx.output_path}",
                )
            )

        return ctx
