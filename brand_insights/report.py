"""Plain-text insights report, matching the dashboard's Export download."""

import re
from pathlib import Path
from typing import Any

from .models import BrandInsights

RULE = "-" * 50
MISSING = "n/a"  # list entries and breakdown fields are never shape-checked


def _field(item: Any, key: str) -> Any:
    """item[key] for mapping entries, None for anything else."""
    return item.get(key) if isinstance(item, dict) else None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _clamp_score(value: Any) -> float:
    """Score as a 0-100 fill amount; non-numbers draw empty."""
    return max(0, min(value, 100)) if _is_number(value) else 0


def _format_number(n: Any) -> str:
    """Format number with commas: 1420 -> '1,420'."""
    return f"{n:,}" if _is_number(n) else MISSING


def _format_score(value: Any) -> str:
    """80 -> '80', 80.0 -> '80', 72.5 -> '72.5'."""
    if not _is_number(value):
        return MISSING
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_text(value: Any) -> str:
    return MISSING if value is None else str(value)


def _section(title: str, lines: list[str]) -> list[str]:
    return ["", title, RULE, *lines]


def generate_text_report(insights: BrandInsights) -> str:
    """
    Build the downloadable text report for a set of insights.

    Args:
        insights: Validated insights body from the API

    Returns:
        Report text without a trailing newline
    """
    details = insights["submittedDetails"]
    metrics = insights["metrics"]
    breakdown = metrics["scoreBreakdown"]

    lines = ["Brand Insights Report", "=" * len("Brand Insights Report")]
    lines += _section("Brand Details", [
        f"Name: {details['brandName']}",
        f"Website: {details.get('brandWebsite', '')}",
        f"Contact Email: {details.get('contactEmail', '')}",
    ])
    lines += _section("Key Metrics", [
        f"Google Visibility Score: {_format_score(metrics['googleVisibility'])}/100",
        f"Search Score: {_format_score(metrics['searchScore'])}/100",
    ])
    lines += _section("Score Breakdown", [
        f"Visibility: {_format_score(_field(breakdown, 'visibility'))}/100",
        f"Keyword Strength: {_format_score(_field(breakdown, 'keywordStrength'))}/100",
        f"Backlinks: {_format_score(_field(breakdown, 'backlinks'))}/100",
        f"Domain Authority: {_format_score(_field(breakdown, 'domainAuthority'))}/100",
    ])
    lines += _section("Top Keywords", [
        f"{_format_text(_field(kw, 'keyword'))}: "
        f"{_format_number(_field(kw, 'monthlySearchVolume'))} monthly searches"
        for kw in metrics["keywordVolumes"]
    ])
    lines += _section("Competitor Analysis", [
        f"{_format_text(_field(comp, 'name'))}: {_format_score(_field(comp, 'searchScore'))}/100"
        for comp in metrics["competitorAnalysis"]
    ])

    return "\n".join(lines).strip()


def report_filename(insights: BrandInsights) -> str:
    """'Acme Labs/EU' -> 'Acme_Labs_EU-insights-report.txt'."""
    slug = re.sub(r"[^\w.-]+", "_", insights["submittedDetails"]["brandName"]).strip("._")
    return f"{slug or 'brand'}-insights-report.txt"


def write_text_report(insights: BrandInsights, output_path: Path) -> Path:
    """Write the text report to output_path and return it."""
    output_path.write_text(generate_text_report(insights) + "\n", encoding="utf-8")
    return output_path
