"""Event types emitted while exporting a page."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional


class EventType(str, Enum):
    """Types of events emitted during an export."""

    # Lifecycle events
    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"

    # Fetch phase
    FETCH_STARTED = "fetch_started"
    FETCH_COMPLETED = "fetch_completed"
    FETCH_FAILED = "fetch_failed"

    # Processing phase
    CONTENT_EXTRACTED = "content_extracted"
    DOCUMENT_RENDERED = "document_rendered"
    DOCUMENT_SAVED = "document_saved"


@dataclass
class ExportEvent:
    """
    Event emitted during an export.

    Example:
        def on_event(event: ExportEvent) -> None:
            if event.type == EventType.CONTENT_EXTRACTED:
                print(f"{event.sections} sections from {event.url}")

        async with Exporter(on_event=on_event) as exporter:
            await exporter.export(url, Path("page.md"))
    """

    type: EventType

    # Timestamp (always UTC)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # Common fields
    url: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None

    # Typed payload fields for specific events
    status_code: Optional[int] = None
    bytes_downloaded: Optional[int] = None
    sections: Optional[int] = None
    duplicates_dropped: Optional[int] = None
    output_format: Optional[str] = None
    output_path: Optional[Path] = None

    @property
    def is_error(self) -> bool:
        """Check if this is an error event."""
        return self.type in (EventType.FAILED, EventType.FETCH_FAILED)
