"""Orchestration: request -> API -> shared state."""

import asyncio
from typing import Callable

from .client import analyze_brand
from .config import Settings
from .models import AnalysisResult, APIError, BrandAnalysisRequest
from .state import InsightsState


async def run_analysis(
    request: BrandAnalysisRequest,
    state: InsightsState,
    *,
    settings: Settings | None = None,
    on_progress: Callable[[str], None] | None = None,
    cancel: asyncio.Event | None = None,
) -> AnalysisResult:
    """
    Analyze a brand and record the outcome in the shared state.

    Steps:
        1. Mark state as loading and clear the previous error
        2. Call the analytics API
        3. Store the insights, or the error message on failure

    Args:
        request: Validated brand details
        state: Session state the views read from
        settings: API settings (default: from environment)
        on_progress: Optional callback(step: str) for progress updates
        cancel: Optional handle to abandon the request

    Returns:
        The same value analyze_brand returned
    """
    def _progress(msg: str):
        if on_progress:
            on_progress(msg)

    state.set_loading(True)
    state.set_error(None)
    try:
        _progress(f"Analyzing {request.brand_name}...")
        result = await analyze_brand(request, settings=settings, cancel=cancel)

        if isinstance(result, APIError):
            state.set_error(result.message)
        else:
            state.set_insights(result)
            _progress("Insights received.")
        return result
    finally:
        state.set_loading(False)
