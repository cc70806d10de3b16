"""Command-line interface for noteclip."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .blocks.parser import MarkdownToBlocks
from .capture import clip_to_blocks, format_captured_content
from .conversion.markdown import HtmlToMarkdown
from .conversion.plaintext import strip_html
from .identifiers import parse_page_identifier
from .logging_config import setup_logging
from .models.blocks import append_children_request, blocks_to_request
from .models.config import ConversionConfig, InlineMode

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="noteclip",
        description="Convert captured HTML to Markdown and Markdown to document blocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert an HTML selection to Markdown
  noteclip html selection.html

  # Resolve relative links against the source page
  noteclip html selection.html --base-url https://example.com/article

  # Parse Markdown from stdin into block requests
  cat note.md | noteclip blocks

  # Build the append request for a page
  noteclip blocks note.md --page https://www.notion.so/My-Page-0123456789abcdef0123456789abcdef

  # Format a clip with its source link
  noteclip clip selection.html --title "Article" --url https://example.com/article
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run diagnostic checks",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )
    parser.add_argument(
        "--inline-mode",
        choices=[mode.value for mode in InlineMode],
        default=None,
        help="Inline formatting overlap resolution (default: scan-order)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    html_parser = subparsers.add_parser("html", help="Convert HTML to Markdown")
    html_parser.add_argument("input", nargs="?", type=Path, help="HTML file (default: stdin)")
    html_parser.add_argument("--base-url", type=str, metavar="URL", help="Base URL for relative links")

    strip_parser = subparsers.add_parser("strip", help="Strip HTML down to plain text")
    strip_parser.add_argument("input", nargs="?", type=Path, help="HTML file (default: stdin)")

    blocks_parser = subparsers.add_parser("blocks", help="Parse Markdown into block requests (JSON)")
    blocks_parser.add_argument("input", nargs="?", type=Path, help="Markdown file (default: stdin)")
    blocks_parser.add_argument(
        "--page",
        type=str,
        metavar="ID_OR_URL",
        help="Wrap blocks in an append request for this page",
    )

    clip_parser = subparsers.add_parser("clip", help="Format an HTML selection with its source link")
    clip_parser.add_argument("input", nargs="?", type=Path, help="HTML file (default: stdin)")
    clip_parser.add_argument("--title", required=True, help="Source page title")
    clip_parser.add_argument("--url", required=True, help="Source page URL")
    clip_parser.add_argument("--json", action="store_true", help="Emit block requests instead of Markdown")

    return parser


def load_config(args: argparse.Namespace) -> ConversionConfig:
    """Build the configuration from an optional YAML file and CLI overrides."""
    data: dict[str, Any] = {}
    if args.config:
        data = ConversionConfig.from_yaml_file(args.config).model_dump(exclude_none=True)

    if args.inline_mode:
        data["inline_mode"] = args.inline_mode
    if getattr(args, "base_url", None):
        data["base_url"] = args.base_url

    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"

    return ConversionConfig(**data)


def _read_input(path: Optional[Path]) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _write_text(text: str) -> None:
    # Verbatim: tabs and control characters in code must survive
    sys.stdout.write(text + "\n")


def run_command(args: argparse.Namespace, config: ConversionConfig, console: Console) -> int:
    """Run one subcommand and return its exit code."""
    source = _read_input(args.input)

    if args.command == "html":
        _write_text(HtmlToMarkdown(base_url=config.base_url).convert(source))
        return 0

    if args.command == "strip":
        _write_text(strip_html(source))
        return 0

    if args.command == "blocks":
        blocks = MarkdownToBlocks(config).parse(source)
        if args.page:
            page_id = parse_page_identifier(args.page)
            if page_id is None:
                Console(stderr=True).print(f"[red]Error:[/red] Invalid page identifier: {escape(args.page)}")
                return 1
            console.print_json(data=append_children_request(page_id, blocks))
        else:
            console.print_json(data=blocks_to_request(blocks))
        return 0

    # clip
    if args.json:
        console.print_json(data=blocks_to_request(clip_to_blocks(source, args.title, args.url, config)))
    else:
        markdown = HtmlToMarkdown(base_url=config.base_url or args.url).convert(source)
        _write_text(format_captured_content(markdown, args.title, args.url))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console()
    error_console = Console(stderr=True)

    if args.doctor:
        from .doctor import run_doctor

        return run_doctor(console=console)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
    except Exception as e:
        error_console.print(f"[red]Configuration error:[/red] {escape(str(e))}", highlight=False)
        return 1

    setup_logging(level=config.log_level, log_file=config.log_file, force=True)
    logger.debug(f"Running {args.command} with inline mode {config.inline_mode.value}")

    try:
        return run_command(args, config, console)
    except (OSError, UnicodeDecodeError) as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
