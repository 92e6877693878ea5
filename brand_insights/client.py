"""Analytics API client: one POST per analysis, every outcome normalized.

analyze_brand() never raises for request failures. It returns either the
parsed insights body (unchanged) or an APIError:

- status 0:    server unreachable (DNS failure, connection refused/dropped,
               or closed without a response)
- status 408:  request aborted via the cancel handle or a configured timeout
- HTTP status: server answered with a non-2xx code
- status 500:  success body failed the shape check, or anything unexpected
"""

import asyncio
import contextlib
import json
import logging
from typing import Any

import httpx

from .config import Settings, get_settings
from .models import AnalysisResult, APIError, BrandAnalysisRequest

logger = logging.getLogger(__name__)

CONNECT_ERROR_MESSAGE = (
    "Unable to connect to the server. Please check your connection and try again."
)
TIMEOUT_MESSAGE = "Request timeout. The analysis took too long. Please try again."
DEFAULT_FAILURE_MESSAGE = "Failed to analyze brand"
INVALID_RESPONSE_MESSAGE = "Invalid response format from server"
UNEXPECTED_MESSAGE = "An unexpected error occurred"


class RequestAborted(Exception):
    """The caller's cancel handle fired before a response arrived."""


async def analyze_brand(
    request: BrandAnalysisRequest,
    *,
    settings: Settings | None = None,
    cancel: asyncio.Event | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AnalysisResult:
    """
    Submit brand details to the analytics API.

    Args:
        request: Brand fields; callers validate them beforehand
        settings: API location and optional timeout (default: from environment)
        cancel: Caller-owned handle; setting it abandons the in-flight request
        transport: Optional httpx transport (mainly for tests)

    Returns:
        The validated insights body, or an APIError describing the failure
    """
    settings = settings or get_settings()
    try:
        response = await _dispatch(request, settings, cancel, transport)
        result = _read_response(response)
    except (httpx.NetworkError, httpx.RemoteProtocolError) as e:
        result = APIError(0, CONNECT_ERROR_MESSAGE, e)
    except (RequestAborted, httpx.TimeoutException) as e:
        result = APIError(408, TIMEOUT_MESSAGE, e)
    except Exception as e:
        result = APIError(500, str(e) or UNEXPECTED_MESSAGE, e)

    if isinstance(result, APIError):
        logger.warning("Brand analysis failed (%s): %s", result.status, result.message)
    return result


def analyze_brand_sync(
    request: BrandAnalysisRequest,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AnalysisResult:
    """Synchronous wrapper for analyze_brand."""
    return asyncio.run(analyze_brand(request, settings=settings, transport=transport))


async def _dispatch(
    request: BrandAnalysisRequest,
    settings: Settings,
    cancel: asyncio.Event | None,
    transport: httpx.AsyncBaseTransport | None,
) -> httpx.Response:
    endpoint = settings.insights_endpoint
    headers = {"Content-Type": "application/json"}
    body = json.dumps(request.to_payload())
    logger.debug("POST %s", endpoint)

    async with httpx.AsyncClient(
        timeout=settings.timeout, transport=transport, follow_redirects=True
    ) as client:
        send = asyncio.ensure_future(client.post(endpoint, content=body, headers=headers))
        if cancel is None:
            return await send

        waiter = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({send, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not send.done():
                send.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await send

        if send.cancelled():
            raise RequestAborted("Request was cancelled before a response arrived")
        return send.result()


def _read_response(response: httpx.Response) -> AnalysisResult:
    if not response.is_success:
        return _error_from_response(response)

    # an unparsable success body raises here and surfaces as a 500
    insights = response.json(parse_constant=_reject_constant)
    if not validate_insights(insights):
        return APIError(500, INVALID_RESPONSE_MESSAGE, insights)
    return insights


def _error_from_response(response: httpx.Response) -> APIError:
    """Best-effort message extraction from a non-2xx body."""
    try:
        data = response.json(parse_constant=_reject_constant)
    except ValueError:
        data = None

    if data is None:
        return APIError(response.status_code, f"Server error: {response.reason_phrase}")

    message = data.get("message") if isinstance(data, dict) else None
    if isinstance(message, list):
        message = message[0] if message else None

    if message in (None, "", 0):
        message = DEFAULT_FAILURE_MESSAGE
    return APIError(response.status_code, str(message), data)


def _reject_constant(name: str) -> Any:
    """NaN and Infinity are not valid JSON."""
    raise ValueError(f"Unexpected token {name} in JSON")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_structured(value: Any) -> bool:
    return isinstance(value, (dict, list))


def validate_insights(data: Any) -> bool:
    """
    Shallow shape check of a parsed success body.

    Only the presence and primitive kind of each field is checked; list
    elements and scoreBreakdown contents are left alone.
    """
    if not isinstance(data, dict):
        return False

    details = data.get("submittedDetails")
    metrics = data.get("metrics")
    if not isinstance(data.get("message"), str):
        return False
    if not isinstance(details, dict) or not isinstance(details.get("brandName"), str):
        return False
    if not isinstance(metrics, dict):
        return False

    return (
        _is_number(metrics.get("googleVisibility"))
        and _is_number(metrics.get("searchScore"))
        and isinstance(metrics.get("keywordVolumes"), list)
        and isinstance(metrics.get("competitorAnalysis"), list)
        and isinstance(metrics.get("historicalTrend"), list)
        and _is_structured(metrics.get("scoreBreakdown"))
    )
