"""Request, insights and error types shared by the client, CLI and web app."""

from dataclasses import dataclass
from typing import Any, TypedDict


class KeywordVolume(TypedDict):
    keyword: str
    monthlySearchVolume: int


class Competitor(TypedDict):
    name: str
    searchScore: float


class HistoricalDataPoint(TypedDict):
    month: str
    visibility: float
    searchScore: float


class ScoreBreakdown(TypedDict):
    visibility: float
    keywordStrength: float
    backlinks: float
    domainAuthority: float


class BrandInsightsMetrics(TypedDict):
    googleVisibility: float
    searchScore: float
    keywordVolumes: list[KeywordVolume]
    competitorAnalysis: list[Competitor]
    historicalTrend: list[HistoricalDataPoint]
    scoreBreakdown: ScoreBreakdown


class SubmittedDetails(TypedDict):
    brandName: str
    brandWebsite: str
    contactEmail: str


class BrandInsights(TypedDict):
    """Parsed success body from the analytics API, kept exactly as received."""

    message: str
    submittedDetails: SubmittedDetails
    metrics: BrandInsightsMetrics


@dataclass(frozen=True)
class BrandAnalysisRequest:
    brand_name: str
    brand_website: str
    contact_email: str

    def to_payload(self) -> dict[str, str]:
        """JSON body sent to the API (camelCase keys)."""
        return {
            "brandName": self.brand_name,
            "brandWebsite": self.brand_website,
            "contactEmail": self.contact_email,
        }


@dataclass(frozen=True)
class APIError:
    """Uniform failure value. status 0 means the server was never reached."""

    status: int
    message: str
    details: Any = None


AnalysisResult = BrandInsights | APIError
