"""CLI entry point for brand insights analysis."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.status import Status

from .config import get_settings
from .dashboard import render_dashboard
from .main import run_analysis
from .models import APIError
from .report import report_filename, write_text_report
from .state import InsightsState
from .validation import FormValidationError, build_request


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brand-insights",
        description="Fetch marketing insights for a brand and show them as a dashboard.",
    )
    parser.add_argument("--name", required=True, help="Brand name")
    parser.add_argument("--website", required=True, help="Brand website (http:// or https://)")
    parser.add_argument("--email", required=True, help="Contact email")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Also write the text report here (a directory uses {brand}-insights-report.txt)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Analytics API base URL (default: $BRAND_INSIGHTS_API_URL or http://localhost:3001)",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None):
    load_dotenv()
    args = _build_parser().parse_args(argv)

    console = Console()
    try:
        settings = get_settings(api_url=args.api_url)
    except ValueError as e:
        console.print(f"[bold red]Configuration error:[/] {e}")
        sys.exit(2)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        request = build_request(args.name, args.website, args.email)
    except FormValidationError as e:
        for message in e.errors.values():
            console.print(f"[red]{message}[/]")
        sys.exit(2)

    state = InsightsState()
    status = Status("", console=console)
    status.start()

    def on_progress(msg: str):
        status.update(f"[bold cyan]{msg}[/]")

    try:
        result = asyncio.run(
            run_analysis(request, state, settings=settings, on_progress=on_progress)
        )
    except KeyboardInterrupt:
        status.stop()
        console.print("\n[yellow]Cancelled.[/]")
        sys.exit(1)
    status.stop()

    if isinstance(result, APIError):
        console.print(f"\n[bold red]Error:[/] {result.message}\n")
        sys.exit(1)

    render_dashboard(result, console)

    if args.output is not None:
        output_path = args.output
        if output_path.is_dir():
            output_path = output_path / report_filename(result)
        write_text_report(result, output_path)
        console.print(f"\n[bold green]Done![/] Report saved to [bold]{output_path}[/]\n")


if __name__ == "__main__":
    main()
