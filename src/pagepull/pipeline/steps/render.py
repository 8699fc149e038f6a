"""Pipeline step that renders the extracted document."""

import logging
from typing import Optional

from ...models.events import EventType, ExportEvent
from ...rendering import get_renderer
from ..base import EventEmitter, PageContext

logger = logging.getLogger(__name__)


class RenderStep:
    """
    Pipeline step that renders ctx.document to ctx.rendered.

    The renderer is picked from ctx.output_format; for PDF output the
    styled HTML document is rendered and left for RasterizeStep.
    """

    name = "render"

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        if ctx.document is None:
            raise ValueError(f"No document to render for {ctx.url}")

        renderer = get_renderer(ctx.output_format)
        ctx.rendered = renderer.render(ctx.document, ctx.options)

        logger.debug(f"Rendered {ctx.url} as {ctx.output_format.value}: {len(ctx.rendered)} chars")

        if emit:
            emit(
                ExportEvent(
                    type=EventType.DOCUMENT_RENDERED,
                    url=ctx.url,
                    output_format=ctx.output_format.value,
                    message=f"Rendered {ctx.output_format.value}",
                )
            )

        return ctx
