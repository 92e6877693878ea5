"""Session state shared between the form and dashboard views."""

from dataclasses import dataclass

from .models import BrandInsights


@dataclass
class InsightsState:
    insights: BrandInsights | None = None
    loading: bool = False
    error: str | None = None

    def set_insights(self, insights: BrandInsights | None) -> None:
        self.insights = insights

    def set_loading(self, loading: bool) -> None:
        self.loading = loading

    def set_error(self, error: str | None) -> None:
        self.error = error

    def reset(self) -> None:
        self.insights = None
        self.loading = False
        self.error = None
