"""Command-line interface for docscope."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from . import __version__
from .conversion import HtmlToMarkdown
from .core.extractor import DocExtractor
from .errors import ExtractionError, InvalidURL
from .logging_config import setup_logging
from .models.config import DocscopeConfig
from .models.result import ExtractionResult

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_URL = 2


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="docscope",
        description="Extract the documentation for a function or method from an API reference page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Everything that looks like documentation on the page
  docscope https://docs.example.com/api

  # Only the section about one function
  docscope https://docs.example.com/api --symbol createUser

  # Markdown into a file
  docscope https://docs.example.com/api -s createUser --markdown -o createUser.md
        """,
    )

    parser.add_argument(
        "url",
        help="Documentation page URL",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--symbol",
        "-s",
        default="",
        help="Function or method to extract (default: whole page)",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )

    # Network settings
    network_group = parser.add_argument_group("network settings")
    network_group.add_argument(
        "--timeout",
        "-t",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Per-request timeout (default: 30)",
    )
    network_group.add_argument(
        "--user-agent",
        type=str,
        help="Custom User-Agent string",
    )

    # Extraction settings
    extraction_group = parser.add_argument_group("extraction settings")
    extraction_group.add_argument(
        "--no-fallback",
        action="store_true",
        help="Do not re-scan the whole page when the targeted pass misses",
    )
    extraction_group.add_argument(
        "--no-title",
        action="store_true",
        help="Do not prefix the output with the page title",
    )

    # Output control
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the result to this file instead of stdout",
    )
    output_group.add_argument(
        "--markdown",
        "-m",
        action="store_true",
        help="Convert extracted HTML fragments to Markdown",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress status messages",
    )

    return parser


def build_config(args: argparse.Namespace) -> DocscopeConfig:
    """
    Layer configuration: YAML file, then DOCSCOPE_* env vars, then flags.

    Args:
        args: Parsed CLI arguments

    Returns:
        Validated config
    """
    base = DocscopeConfig.from_yaml_file(args.config) if args.config else None
    config = DocscopeConfig.from_env(base)

    data = config.model_dump()
    if args.timeout is not None:
        data["network"]["timeout"] = args.timeout
    if args.user_agent:
        data["network"]["user_agent"] = args.user_agent
    if args.no_fallback:
        data["extraction"]["fallback"] = False
    if args.no_title:
        data["extraction"]["include_title"] = False
    if args.verbose:
        data["verbose"] = True
    elif args.quiet:
        data["log_level"] = "ERROR"

    return DocscopeConfig.model_validate(data)


def render(result: ExtractionResult, markdown: bool) -> str:
    if markdown:
        return HtmlToMarkdown().convert_fragments(result.fragments, result.url)
    return result.content + "\n"


def run_extractor(args: argparse.Namespace) -> int:
    """Run one extraction with given arguments."""
    console = Console(stderr=True)

    try:
        config = build_config(args)
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return EXIT_FAILED

    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
        verbose=config.verbose,
    )

    async def run() -> ExtractionResult:
        async with DocExtractor(config) as extractor:
            return await extractor.extract(args.url, args.symbol)

    try:
        if args.quiet:
            result = asyncio.run(run())
        else:
            target = f" for [bold]{args.symbol}[/bold]" if args.symbol else ""
            with console.status(f"[cyan]Extracting documentation from {args.url}{target}..."):
                result = asyncio.run(run())
    except InvalidURL as e:
        console.print(f"[red]Invalid URL:[/red] {e.reason}")
        return EXIT_INVALID_URL
    except ExtractionError as e:
        console.print(f"[red]Error:[/red] {e}")
        return EXIT_FAILED

    output = render(result, args.markdown)

    if args.output:
        try:
            args.output.write_text(output, encoding="utf-8")
        except OSError as e:
            console.print(f"[red]Error writing to output file:[/red] {e}")
            return EXIT_FAILED
        if not args.quiet:
            console.print(f"[green]Output written to[/green] {args.output}")
    else:
        sys.stdout.write(output)

    if config.verbose:
        source = "fallback pass" if result.used_fallback else "targeted pass"
        console.print(f"{result.fragment_count} fragment(s), {len(result.content)} chars from the {source}")

    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_extractor(args)


if __name__ == "__main__":
    sys.exit(main())
