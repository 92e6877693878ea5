"""Terminal rendering of brand insights with rich."""

from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from .models import BrandInsights
from .report import _clamp_score, _field, _format_number, _format_score, _format_text


def _gauge(title: str, value: float, color: str) -> Panel:
    bar = ProgressBar(
        total=100,
        completed=_clamp_score(value),
        width=30,
        complete_style=color,
        finished_style=color,
    )
    score = Text(_format_score(value), style=f"bold {color}")
    return Panel(
        Group(score, bar, Text("Out of 100", style="dim")),
        title=title,
        width=36,
    )


def _details_table(insights: BrandInsights) -> Table:
    details = insights["submittedDetails"]
    table = Table.grid(padding=(0, 3))
    table.add_row(
        Text("BRAND NAME", style="dim"), Text("WEBSITE", style="dim"), Text("CONTACT", style="dim")
    )
    table.add_row(
        Text(details["brandName"], style="bold"),
        details.get("brandWebsite", ""),
        details.get("contactEmail", ""),
    )
    return table


def _trend_table(insights: BrandInsights) -> Table:
    table = Table(title="6-Month Performance Trend", title_justify="left")
    table.add_column("Month")
    table.add_column("Visibility", justify="right", style="blue")
    table.add_column("Search Score", justify="right", style="magenta")
    for point in insights["metrics"]["historicalTrend"]:
        table.add_row(
            Text(_format_text(_field(point, "month"))),
            _format_score(_field(point, "visibility")),
            _format_score(_field(point, "searchScore")),
        )
    return table


def _breakdown_table(insights: BrandInsights) -> Table:
    breakdown = insights["metrics"]["scoreBreakdown"]
    table = Table(title="Score Components Breakdown", title_justify="left")
    table.add_column("Component")
    table.add_column("Score", justify="right")
    for label, key in (
        ("Visibility", "visibility"),
        ("Keyword Strength", "keywordStrength"),
        ("Backlinks", "backlinks"),
        ("Domain Authority", "domainAuthority"),
    ):
        table.add_row(label, _format_score(_field(breakdown, key)))
    return table


def _competitor_table(insights: BrandInsights) -> Table:
    table = Table(title="Competitor Analysis", title_justify="left")
    table.add_column("Competitor")
    table.add_column("Search Score", justify="right")
    table.add_column("")
    for comp in insights["metrics"]["competitorAnalysis"]:
        score = _field(comp, "searchScore")
        table.add_row(
            Text(_format_text(_field(comp, "name"))),
            _format_score(score),
            ProgressBar(total=100, completed=_clamp_score(score), width=24, complete_style="yellow"),
        )
    return table


def _keyword_table(insights: BrandInsights) -> Table:
    table = Table(title="Top Keywords", title_justify="left")
    table.add_column("Keyword")
    table.add_column("Monthly Search Volume", justify="right", style="bold blue")
    for kw in insights["metrics"]["keywordVolumes"]:
        table.add_row(
            Text(_format_text(_field(kw, "keyword"))),
            _format_number(_field(kw, "monthlySearchVolume")),
        )
    return table


def render_dashboard(insights: BrandInsights, console: Console) -> None:
    """Print the full insights dashboard to console."""
    metrics = insights["metrics"]

    console.print(Panel(_details_table(insights), title="Brand Insights Dashboard"))
    console.print(Columns([
        _gauge("Google Visibility Score", metrics["googleVisibility"], "blue"),
        _gauge("Search Score", metrics["searchScore"], "magenta"),
    ]))
    console.print(Columns([_trend_table(insights), _breakdown_table(insights)]))
    console.print(_competitor_table(insights))
    console.print(_keyword_table(insights))
