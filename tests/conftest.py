"""
Shared fixtures for the brand insights tests.

HTTP traffic is faked with httpx.MockTransport, so no test touches the network.
"""

import copy
from typing import Any, Callable

import httpx
import pytest

from brand_insights.config import Settings
from brand_insights.models import BrandAnalysisRequest

API_URL = "http://api.test"

SAMPLE_INSIGHTS: dict[str, Any] = {
    "message": "ok",
    "submittedDetails": {
        "brandName": "Acme",
        "brandWebsite": "https://acme.com",
        "contactEmail": "a@acme.com",
    },
    "metrics": {
        "googleVisibility": 80,
        "searchScore": 75,
        "keywordVolumes": [],
        "competitorAnalysis": [],
        "historicalTrend": [],
        "scoreBreakdown": {
            "visibility": 80,
            "keywordStrength": 70,
            "backlinks": 60,
            "domainAuthority": 90,
        },
    },
}


@pytest.fixture
def settings() -> Settings:
    return Settings(api_url=API_URL)


@pytest.fixture
def acme_request() -> BrandAnalysisRequest:
    return BrandAnalysisRequest(
        brand_name="Acme",
        brand_website="https://acme.com",
        contact_email="a@acme.com",
    )


@pytest.fixture
def insights_body() -> dict[str, Any]:
    """A fresh copy of the minimal valid insights body."""
    return copy.deepcopy(SAMPLE_INSIGHTS)


@pytest.fixture
def full_insights(insights_body) -> dict[str, Any]:
    """Valid insights with populated lists, for rendering tests."""
    metrics = insights_body["metrics"]
    metrics["keywordVolumes"] = [
        {"keyword": "acme anvils", "monthlySearchVolume": 12400},
        {"keyword": "rocket skates", "monthlySearchVolume": 880},
    ]
    metrics["competitorAnalysis"] = [
        {"name": "Globex", "searchScore": 68},
        {"name": "Initech", "searchScore": 54.5},
    ]
    metrics["historicalTrend"] = [
        {"month": "Jan", "visibility": 70, "searchScore": 65},
        {"month": "Feb", "visibility": 74, "searchScore": 69},
    ]
    return insights_body


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport answering every request with one fixed response."""

    def _make(status_code: int = 200, **response_kwargs) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, **response_kwargs)

        return httpx.MockTransport(handler)

    return _make


@pytest.fixture
def sparse_insights(insights_body) -> dict[str, Any]:
    """Passes the shallow shape check, but list entries and breakdown are empty or odd."""
    metrics = insights_body["metrics"]
    metrics["scoreBreakdown"] = {}
    metrics["keywordVolumes"] = [{"keyword": "acme"}, 1, None]
    metrics["competitorAnalysis"] = [{"searchScore": "high"}]
    metrics["historicalTrend"] = [{"month": "Jan"}, "Feb"]
    return insights_body
