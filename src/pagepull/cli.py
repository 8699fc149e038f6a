"""Command-line interface for pagepull."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from . import __version__
from .core.exporter import Exporter
from .errors import PagepullError, UnsupportedFormatError
from .logging_config import setup_logging
from .models.config import Margins, PagepullConfig, PageSize
from .models.events import EventType, ExportEvent
from .rendering import OutputFormat, detect_format


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="pagepull",
        description="Extract the readable content of a web page into Markdown, text, HTML or PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Format from the file extension
  pagepull https://example.com/post post.md

  # PDF with a footer and Letter paper
  pagepull https://example.com/post post.pdf --footer "Acme Corp" --page-size Letter

  # Explicit format, settings from a file
  pagepull https://example.com/post out --format text --config pagepull.yaml
        """,
    )

    parser.add_argument("url", help="URL of the page to export")
    parser.add_argument("output", type=Path, help="Output file")

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file (command-line options take precedence)",
    )

    # Output options
    output_group = parser.add_argument_group("output options")
    output_group.add_argument(
        "--format",
        "-f",
        dest="output_format",
        default=None,
        metavar="FORMAT",
        help="Output format: markdown, text, html, pdf (default: from file extension)",
    )
    output_group.add_argument(
        "--footer",
        default=None,
        metavar="TEXT",
        help="Footer text appended to the document",
    )
    output_group.add_argument(
        "--page-size",
        choices=[size.value for size in PageSize],
        default=None,
        help="Paper size for PDF and HTML output (default: A4)",
    )
    output_group.add_argument(
        "--margin",
        default=None,
        metavar="LENGTH",
        help="Page margin on every side, as a CSS length (default: 20mm)",
    )
    output_group.add_argument(
        "--live-date",
        action="store_true",
        help="Show the render time instead of the extraction time as generation date",
    )

    # Extraction options
    extraction_group = parser.add_argument_group("extraction options")
    extraction_group.add_argument(
        "--min-paragraph-length",
        type=int,
        default=None,
        metavar="N",
        help="Drop paragraphs shorter than N characters (default: 3)",
    )

    # Network options
    network_group = parser.add_argument_group("network options")
    network_group.add_argument(
        "--user-agent",
        default=None,
        help="Custom User-Agent header",
    )
    network_group.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Request timeout (default: 30)",
    )
    network_group.add_argument(
        "--max-retries",
        type=int,
        default=None,
        metavar="N",
        help="Retry attempts for transient failures (default: 0)",
    )

    # Output control
    control_group = parser.add_argument_group("output control")
    verbosity = control_group.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    verbosity.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress output",
    )

    return parser


def build_config(args: argparse.Namespace) -> PagepullConfig:
    """
    Build configuration from an optional YAML file and command-line overrides.

    Raises:
        pydantic.ValidationError: If the merged settings are invalid
        OSError: If the config file cannot be read
    """
    data: dict[str, Any] = {}
    if args.config:
        data = PagepullConfig.from_yaml_file(args.config).model_dump()

    # Render settings
    render_kwargs: dict[str, Any] = data.setdefault("render", {})
    if args.footer is not None:
        render_kwargs["footer_text"] = args.footer
    if args.page_size:
        render_kwargs["page_size"] = args.page_size
    if args.margin:
        render_kwargs["margins"] = Margins.uniform(args.margin).model_dump()
    if args.live_date:
        render_kwargs["live_timestamp"] = True

    # Extraction settings
    if args.min_paragraph_length is not None:
        data.setdefault("extraction", {})["min_paragraph_length"] = args.min_paragraph_length

    # Network settings
    network_kwargs: dict[str, Any] = data.setdefault("network", {})
    if args.user_agent:
        network_kwargs["user_agent"] = args.user_agent
    if args.timeout is not None:
        network_kwargs["timeout"] = args.timeout
    if args.max_retries is not None:
        network_kwargs["max_retries"] = args.max_retries

    # Log level
    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"

    return PagepullConfig.model_validate(data)


def run_export(args: argparse.Namespace) -> int:
    """Run a single export with given arguments."""
    console = Console()

    try:
        config = build_config(args)
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(level=config.log_level, log_file=config.log_file)

    # Validate the format before touching the network
    try:
        if args.output_format:
            output_format = OutputFormat.parse(args.output_format)
        else:
            output_format = detect_format(args.output)
    except UnsupportedFormatError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    async def run() -> int:
        if not args.quiet:
            console.print(f"[bold blue]pagepull[/bold blue] v{__version__}")
            console.print(f"Source: {args.url}")
            console.print(f"Output: {args.output} ({output_format.value})")
            console.print()

        try:
            if args.quiet:
                async with Exporter(config) as exporter:
                    output_path = await exporter.export(args.url, args.output, output_format)
            else:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=console,
                    transient=True,
                ) as progress:
                    task = progress.add_task("Starting...", total=None)

                    def on_event(event: ExportEvent) -> None:
                        if event.type == EventType.FETCH_STARTED:
                            progress.update(task, description=f"[cyan]Fetching {event.url}")
                        elif event.type == EventType.CONTENT_EXTRACTED:
                            progress.update(task, description=f"[cyan]Extracted {event.sections} sections")
                        elif event.type == EventType.DOCUMENT_RENDERED:
                            progress.update(task, description=f"[cyan]Writing {event.output_format}")
                        elif event.type == EventType.FAILED:
                            console.print(f"[red]Failed:[/red] {event.url} - {event.error}")

                    async with Exporter(config, on_event=on_event) as exporter:
                        output_path = await exporter.export(args.url, args.output, output_format)

            if not args.quiet:
                console.print(f"[green]Saved:[/green] {output_path}")
            return 0

        except (PagepullError, ImportError, OSError) as e:
            console.print(f"[red]Error:[/red] {e}")
            if args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    return asyncio.run(run())


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_export(args)


if __name__ == "__main__":
    sys.exit(main())
