"""Styled HTML document renderer (input for the page rasterizer)."""

from typing import Optional

from ..models.config import RenderOptions
from ..models.content import ContentDocument, Heading, ItemList, Paragraph, Quote, Section
from .base import BaseRenderer, OutputFormat, escape_html

BASE_STYLES = """
  body {
    font-family: 'Helvetica Neue', Arial, sans-serif;
    line-height: 1.6;
    color: #333;
    font-size: 11pt;
  }
  h1 {
    font-size: 24pt;
    color: #1a1a1a;
    margin-top: 0;
    margin-bottom: 20px;
    page-break-after: avoid;
  }
  h2 {
    font-size: 18pt;
    color: #2a2a2a;
    margin-top: 24px;
    margin-bottom: 12px;
    page-break-after: avoid;
  }
  h3 {
    font-size: 14pt;
    color: #3a3a3a;
    margin-top: 18px;
    margin-bottom: 10px;
    page-break-after: avoid;
  }
  h4, h5, h6 {
    font-size: 12pt;
    color: #3a3a3a;
    margin-top: 14px;
    margin-bottom: 8px;
    page-break-after: avoid;
  }
  p {
    margin-bottom: 12px;
    text-align: justify;
    orphans: 3;
    widows: 3;
  }
  ul, ol {
    margin-bottom: 12px;
    padding-left: 25px;
  }
  li {
    margin-bottom: 6px;
  }
  blockquote {
    margin: 15px 0;
    padding: 10px 20px;
    border-left: 4px solid #ddd;
    background: #f9f9f9;
    font-style: italic;
  }
  .header {
    text-align: center;
    margin-bottom: 30px;
    padding-bottom: 20px;
    border-bottom: 2px solid #333;
  }
  .metadata {
    font-size: 9pt;
    color: #666;
    margin-top: 10px;
  }
  .footer {
    margin-top: 40px;
    padding-top: 15px;
    border-top: 1px solid #ccc;
    font-size: 9pt;
    color: #666;
    text-align: center;
  }
"""


def get_styles(options: Optional[RenderOptions] = None) -> str:
    """Return the stylesheet, with an @page rule for the configured paper."""
    options = options or RenderOptions()
    m = options.margins
    page_rule = (
        "\n  @page {\n"
        f"    size: {options.page_size.value};\n"
        f"    margin: {m.top} {m.right} {m.bottom} {m.left};\n"
        "  }"
    )
    return page_rule + BASE_STYLES


class HtmlRenderer(BaseRenderer):
    """
    Renders a document as a standalone, styled HTML page.

    Every text node is escaped. The page is the input to the PDF rasterizer
    but is also a valid output format of its own.
    """

    output_format = OutputFormat.HTML

    def render_section(self, section: Section) -> str:
        match section:
            case Heading(level=level, text=text):
                return f"<h{level}>{escape_html(text)}</h{level}>"
            case Paragraph(text=text):
                return f"<p>{escape_html(text)}</p>"
            case ItemList(ordered=ordered, items=items):
                tag = "ol" if ordered else "ul"
                lis = "".join(f"<li>{escape_html(item)}</li>" for item in items)
                return f"<{tag}>{lis}</{tag}>"
            case Quote(text=text):
                return f"<blockquote>{escape_html(text)}</blockquote>"
            case _:
                self.logger.debug(f"Skipping unknown section type: {type(section).__name__}")
                return ""

    def render_header(self, document: ContentDocument, options: RenderOptions) -> str:
        return f"""
  <div class="header">
    <h1>{escape_html(document.title)}</h1>
    <div class="metadata">
      <p>Quelle: {escape_html(document.metadata.source_url)}</p>
      <p>Generiert am: {escape_html(self.generation_date(document, options))}</p>
    </div>
  </div>
"""

    def render_footer(self, footer_text: Optional[str]) -> str:
        if not footer_text:
            return ""
        return f"""
  <div class="footer">
    <p>{escape_html(footer_text)}</p>
  </div>
"""

    def render(self, document: ContentDocument, options: Optional[RenderOptions] = None) -> str:
        options = options or RenderOptions()
        body = "\n".join(self.render_sections(document.sections))

        return f"""<!DOCTYPE html>
<html lang="de">
<head>
  <meta charset="UTF-8">
  <title>{escape_html(document.title)}</title>
  <style>{get_styles(options)}</style>
</head>
<body>
{self.render_header(document, options)}
{body}
{self.render_footer(options.footer_text)}
</body>
</html>
"""

    def get_file_extension(self) -> str:
        return ".html"
