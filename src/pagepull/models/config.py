"""Pydantic configuration models for pagepull."""

from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

# Main-content landmarks, in priority order
DEFAULT_CONTENT_SELECTORS = [
    "main",
    '[role="main"]',
    "article",
    ".main-content",
    "#main",
]


class PageSize(str, Enum):
    """Paper sizes understood by the page rasterizer."""

    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    LETTER = "Letter"
    LEGAL = "Legal"
    TABLOID = "Tabloid"


class Margins(BaseModel):
    """Page margins as CSS lengths (e.g. '20mm', '1in')."""

    top: str = Field("20mm", description="Top margin")
    right: str = Field("20mm", description="Right margin")
    bottom: str = Field("20mm", description="Bottom margin")
    left: str = Field("20mm", description="Left margin")

    model_config = {"extra": "forbid"}

    @classmethod
    def uniform(cls, value: str) -> "Margins":
        """Create margins with the same length on every side."""
        return cls(top=value, right=value, bottom=value, left=value)


class ExtractionConfig(BaseModel):
    """Configuration for sanitizing and section extraction."""

    min_paragraph_length: int = Field(
        3,
        ge=1,
        description="Minimum trimmed length for a paragraph to be kept",
    )
    content_selectors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_SELECTORS),
        description="CSS selectors for the main content region, in priority order",
    )
    remove_selectors: list[str] = Field(
        default_factory=list,
        description="Additional CSS selectors to remove before extraction",
    )

    model_config = {"extra": "forbid"}


class RenderOptions(BaseModel):
    """Options shared by all renderers; page settings apply to the styled format only."""

    footer_text: Optional[str] = Field(None, description="Footer text (omitted when empty)")
    page_size: PageSize = Field(PageSize.A4, description="Paper size for the styled document")
    margins: Margins = Field(default_factory=Margins, description="Page margins for the styled document")
    live_timestamp: bool = Field(
        False,
        description="Show the render time instead of the extraction time as generation date",
    )

    model_config = {"extra": "forbid"}


class NetworkConfig(BaseModel):
    """Configuration for the HTTP client."""

    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    accept_language: str = Field(
        "de-DE,de;q=0.9,en-US;q=0.8,en;q=0.7",
        description="Accept-Language header sent with requests",
    )
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(0, ge=0, description="Retry attempts for transient failures")
    proxy: Optional[str] = Field(None, description="HTTP/HTTPS proxy URL")

    model_config = {"extra": "forbid"}


class PdfConfig(BaseModel):
    """Configuration for the Playwright page rasterizer."""

    headless: bool = Field(True, description="Run the browser headless")
    print_background: bool = Field(True, description="Print CSS backgrounds")
    prefer_css_page_size: bool = Field(True, description="Let the @page rule decide the page size")
    timeout: float = Field(30.0, gt=0, description="Timeout for page operations in seconds")

    model_config = {"extra": "forbid"}


class PagepullConfig(BaseModel):
    """
    Root configuration model for pagepull.

    Example:
        config = PagepullConfig(
            extraction=ExtractionConfig(min_paragraph_length=10),
            render=RenderOptions(footer_text="Acme Corp"),
        )

    YAML format:
        extraction:
          min_paragraph_length: 10
        render:
          footer_text: Acme Corp
          page_size: Letter
        network:
          timeout: 15
    """

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    render: RenderOptions = Field(default_factory=RenderOptions)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    pdf: PdfConfig = Field(default_factory=PdfConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "PagepullConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "PagepullConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
