"""SaveStep - File saving pipeline step."""

import asyncio
import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ...models.events import EventType, ExportEvent
from ..base import EventEmitter, PageContext

logger = logging.getLogger(__name__)


def _write_atomic(path: Path, content: str) -> None:
    """Write *content* next to *path*, then move it into place."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


class SaveStep:
    """
    Pipeline step that writes ctx.rendered to ctx.output_path.

    Creates parent directories as needed. The file is written to a temporary
    sibling first, so a failed save leaves any existing file untouched.

    Example:
        ctx = await SaveStep().execute(ctx)
        print(f"Saved to {ctx.output_path}")
    """

    name = "save"

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        """
        Execute the save step.

        Errors are logged and re-raised; the pipeline reports them as FAILED.

        Args:
            ctx: Page context with rendered content
            emit: Optional callback to emit events

        Returns:
            PageContext with output_path resolved
        """
        if ctx.rendered is None:
            raise ValueError(f"No rendered content to save for {ctx.url}")

        output_path = ctx.output_path.resolve()

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)

            # Write content (use asyncio.to_thread to avoid blocking)
            await asyncio.to_thread(_write_atomic, output_path, ctx.rendered)
        except OSError as e:
            logger.error(f"Failed to save {ctx.url} to {output_path}: {e}")
            raise

        ctx.output_path = output_path
        logger.info(f"Saved: {output_path}")

        if emit:
            emit(
                ExportEvent(
                    type=EventType.DOCUMENT_SAVED,
                    url=ctx.url,
                    output_path=output_path,
                    output_format=ctx.output_format.value,
                    message=f"Saved to {output_path}",
                )
            )

        return ctx
