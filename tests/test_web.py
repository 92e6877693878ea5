"""Tests for the FastAPI web app."""

from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

import brand_insights.main as main_module
from brand_insights.models import APIError
from brand_insights.report import report_filename
from brand_insights.state import InsightsState
from brand_insights.web import NO_INSIGHTS_MESSAGE, create_app

FORM = {
    "brandName": "Acme",
    "brandWebsite": "https://acme.com",
    "contactEmail": "a@acme.com",
}


@pytest.fixture
def state() -> InsightsState:
    return InsightsState()


@pytest.fixture
def client(state, settings) -> TestClient:
    return TestClient(create_app(state=state, settings=settings))


def _fake_analyze(result):
    calls = []

    async def fake(request, *, settings=None, cancel=None):
        calls.append(request)
        return result

    fake.calls = calls
    return fake


def test_index_serves_form(client):
    response = client.get("/")
    assert response.status_code == 200
    assert 'id="brandName"' in response.text
    assert "/api/analyze" in response.text


def test_analyze_success_updates_state(monkeypatch, client, state, full_insights):
    fake = _fake_analyze(full_insights)
    monkeypatch.setattr(main_module, "analyze_brand", fake)

    response = client.post("/api/analyze", json=FORM)

    assert response.status_code == 200
    assert response.json() == full_insights
    assert state.insights == full_insights
    assert fake.calls[0].brand_website == "https://acme.com"


def test_analyze_rejects_invalid_fields_without_calling_api(monkeypatch, client):
    fake = _fake_analyze(None)
    monkeypatch.setattr(main_module, "analyze_brand", fake)

    response = client.post("/api/analyze", json={**FORM, "contactEmail": "nope"})

    assert response.status_code == 422
    assert response.json() == {"errors": {"contactEmail": "Please enter a valid email address"}}
    assert fake.calls == []


def test_analyze_passes_through_server_status(monkeypatch, client, state):
    monkeypatch.setattr(
        main_module, "analyze_brand", _fake_analyze(APIError(400, "brandWebsite must be a URL"))
    )

    response = client.post("/api/analyze", json=FORM)

    assert response.status_code == 400
    assert response.json() == {"message": "brandWebsite must be a URL", "status": 400}
    assert state.error == "brandWebsite must be a URL"


def test_unreachable_api_is_bad_gateway(monkeypatch, client):
    monkeypatch.setattr(
        main_module,
        "analyze_brand",
        _fake_analyze(APIError(0, "Unable to connect to the server. Please check your connection and try again.")),
    )

    response = client.post("/api/analyze", json=FORM)

    assert response.status_code == 502
    assert response.json()["status"] == 0


def test_insights_page_without_data(client):
    response = client.get("/insights")
    assert response.status_code == 404
    assert NO_INSIGHTS_MESSAGE in response.text
    assert "Back to Form" in response.text


def test_insights_page_shows_stored_error(client, state):
    state.set_error("Request timeout. The analysis took too long. Please try again.")
    response = client.get("/insights")
    assert "Request timeout" in response.text


def test_insights_dashboard(client, state, full_insights):
    full_insights["submittedDetails"]["brandName"] = "Acme <Labs>"
    state.set_insights(full_insights)

    response = client.get("/insights")

    assert response.status_code == 200
    text = response.text
    assert "Brand Insights Dashboard" in text
    assert "Acme &lt;Labs&gt;" in text
    assert "12,400" in text
    assert "Globex" in text
    assert "6-Month Performance Trend" in text


def test_report_download(client, state, full_insights):
    state.set_insights(full_insights)

    response = client.get("/insights/report")

    assert response.status_code == 200
    assert response.headers["content-disposition"] == (
        'attachment; filename="Acme-insights-report.txt"; '
        "filename*=UTF-8''Acme-insights-report.txt"
    )
    assert response.text.startswith("Brand Insights Report\n")
    assert "acme anvils: 12,400 monthly searches" in response.text


def test_report_download_without_data(client):
    response = client.get("/insights/report")
    assert response.status_code == 404


def test_sparse_insights_render(client, state, sparse_insights):
    state.set_insights(sparse_insights)

    page = client.get("/insights")
    report = client.get("/insights/report")

    assert page.status_code == 200
    assert "Score Components Breakdown" in page.text
    assert report.status_code == 200
    assert "Visibility: n/a/100" in report.text


@pytest.mark.parametrize("brand_name", ["Zoop™", "東京ブランド", 'Acme "Labs"'])
def test_report_download_with_non_ascii_or_quoted_name(client, state, insights_body, brand_name):
    insights_body["submittedDetails"]["brandName"] = brand_name
    state.set_insights(insights_body)

    response = client.get("/insights/report")

    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="')
    assert f"filename*=UTF-8''{quote(report_filename(insights_body))}" in disposition
    assert response.text.startswith("Brand Insights Report\n")


def test_non_error_upstream_status_is_passed_through(monkeypatch, client):
    monkeypatch.setattr(main_module, "analyze_brand", _fake_analyze(APIError(304, "Failed to analyze brand")))

    response = client.post("/api/analyze", json=FORM)

    assert response.status_code == 304
