"""Plain text renderer."""

from typing import Optional

from ..models.config import RenderOptions
from ..models.content import ContentDocument, Heading, ItemList, Paragraph, Quote, Section
from .base import BaseRenderer, OutputFormat

BULLET = "•"
FOOTER_RULE = "─" * 50


def underline(text: str, char: str) -> str:
    """Return *text* followed by a line of *char* of the same length."""
    return f"{text}\n{char * len(text)}\n"


class PlainTextRenderer(BaseRenderer):
    """Renders a document as plain text with underlined top-level headings."""

    output_format = OutputFormat.TEXT

    def render_section(self, section: Section) -> str:
        match section:
            case Heading(level=1, text=text):
                return underline(text, "=")
            case Heading(level=2, text=text):
                return underline(text, "-")
            case Heading(text=text):
                return f"{text}\n"
            case Paragraph(text=text):
                return f"{text}\n"
            case ItemList(ordered=True, items=items):
                return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1)) + "\n"
            case ItemList(items=items):
                return "\n".join(f"{BULLET} {item}" for item in items) + "\n"
            case Quote(text=text):
                return f'  "{text}"\n'
            case _:
                self.logger.debug(f"Skipping unknown section type: {type(section).__name__}")
                return ""

    def render(self, document: ContentDocument, options: Optional[RenderOptions] = None) -> str:
        options = options or RenderOptions()

        text = underline(document.title, "=") + "\n"
        text += f"Source: {document.metadata.source_url}\n"
        text += f"Generated: {self.generation_date(document, options)}\n\n"

        text += "\n".join(self.render_sections(document.sections))

        if options.footer_text:
            text += f"\n{FOOTER_RULE}\n\n{options.footer_text}\n"

        return text

    def get_file_extension(self) -> str:
        return ".txt"
