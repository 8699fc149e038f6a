"""Markdown renderer."""

from typing import Optional

from ..models.config import RenderOptions
from ..models.content import ContentDocument, Heading, ItemList, Paragraph, Quote, Section
from .base import BaseRenderer, OutputFormat


class MarkdownRenderer(BaseRenderer):
    """
    Renders a document as Markdown.

    Example:
        markdown = MarkdownRenderer().render(doc, RenderOptions(footer_text="Acme"))
    """

    output_format = OutputFormat.MARKDOWN

    def render_section(self, section: Section) -> str:
        match section:
            case Heading(level=level, text=text):
                return f"{'#' * level} {text}\n"
            case Paragraph(text=text):
                return f"{text}\n"
            case ItemList(ordered=True, items=items):
                return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1)) + "\n"
            case ItemList(items=items):
                return "\n".join(f"- {item}" for item in items) + "\n"
            case Quote(text=text):
                return f"> {text}\n"
            case _:
                self.logger.debug(f"Skipping unknown section type: {type(section).__name__}")
                return ""

    def render(self, document: ContentDocument, options: Optional[RenderOptions] = None) -> str:
        options = options or RenderOptions()

        markdown = f"# {document.title}\n\n"
        markdown += f"**Source:** {document.metadata.source_url}\n"
        markdown += f"**Generated:** {self.generation_date(document, options)}\n\n"

        markdown += "\n".join(self.render_sections(document.sections))

        if options.footer_text:
            markdown += f"\n---\n\n{options.footer_text}\n"

        return markdown

    def get_file_extension(self) -> str:
        return ".md"
