"""FastAPI web app: brand form, insights dashboard and report download."""

import html
import logging
import os
from urllib.parse import quote

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel

from .config import Settings, get_settings
from .main import run_analysis
from .models import APIError, BrandInsights
from .report import (
    _clamp_score,
    _field,
    _format_number,
    _format_score,
    _format_text,
    generate_text_report,
    report_filename,
)
from .state import InsightsState
from .validation import validate_request_fields, build_request

load_dotenv()

logging.basicConfig(
    level=os.getenv("BRAND_INSIGHTS_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

NO_INSIGHTS_MESSAGE = "No insights data found. Please analyze a brand first."


class AnalyzeForm(BaseModel):
    brandName: str = ""
    brandWebsite: str = ""
    contactEmail: str = ""


def create_app(
    state: InsightsState | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the web app around one shared InsightsState.

    Settings are read from the environment per request when not given.
    """
    app = FastAPI(title="Brand Insights")
    app.state.insights = state if state is not None else InsightsState()

    @app.get("/", response_class=HTMLResponse)
    async def index():
        return INDEX_HTML

    @app.post("/api/analyze")
    async def analyze(form: AnalyzeForm):
        errors = validate_request_fields(form.brandName, form.brandWebsite, form.contactEmail)
        if errors:
            return JSONResponse({"errors": errors}, status_code=422)

        request = build_request(form.brandName, form.brandWebsite, form.contactEmail)
        logger.info("Analysis requested for %s", request.brand_name)
        result = await run_analysis(
            request, app.state.insights, settings=settings or get_settings()
        )
        if isinstance(result, APIError):
            # status 0 never reached the server; report it as a bad gateway
            status_code = result.status or 502
            return JSONResponse(
                {"message": result.message, "status": result.status},
                status_code=status_code,
            )
        return result

    @app.get("/insights", response_class=HTMLResponse)
    async def insights_page():
        shared: InsightsState = app.state.insights
        if shared.error or not shared.insights:
            return HTMLResponse(
                _error_html(shared.error or NO_INSIGHTS_MESSAGE),
                status_code=404,
            )
        return _dashboard_html(shared.insights)

    @app.get("/insights/report")
    async def download_report():
        insights = app.state.insights.insights
        if not insights:
            return PlainTextResponse(NO_INSIGHTS_MESSAGE, status_code=404)
        filename = report_filename(insights)
        return PlainTextResponse(
            generate_text_report(insights),
            headers={"Content-Disposition": _content_disposition(filename)},
        )

    return app


def _content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback name and the UTF-8 original."""
    fallback = filename if filename.isascii() else "insights-report.txt"
    fallback = fallback.replace("\\", "_").replace('"', "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


# ---------------------------------------------------------------------------
# Server-rendered dashboard
# ---------------------------------------------------------------------------

def _gauge_svg(value: float, color: str) -> str:
    filled = _clamp_score(value) / 100 * 283
    return (
        '<svg class="gauge" viewBox="0 0 100 100">'
        '<circle cx="50" cy="50" r="45" fill="none" stroke="#334155" stroke-width="8"/>'
        f'<circle cx="50" cy="50" r="45" fill="none" stroke="{color}" stroke-width="8" '
        f'stroke-dasharray="{filled:.1f} 283" stroke-linecap="round" transform="rotate(-90 50 50)"/>'
        f'<text x="50" y="58" text-anchor="middle" font-size="24" fill="{color}">'
        f"{html.escape(_format_score(value))}</text>"
        "</svg>"
    )


def _bar(value: float, color: str) -> str:
    width = _clamp_score(value)
    return f'<div class="bar"><span style="width:{width}%;background:{color}"></span></div>'


def _dashboard_html(insights: BrandInsights) -> str:
    esc = html.escape
    details = insights["submittedDetails"]
    metrics = insights["metrics"]
    breakdown = metrics["scoreBreakdown"]

    trend_rows = "".join(
        f"<tr><td>{esc(_format_text(_field(p, 'month')))}</td>"
        f"<td>{_bar(_field(p, 'visibility'), '#3b82f6')}</td>"
        f"<td>{_bar(_field(p, 'searchScore'), '#8b5cf6')}</td></tr>"
        for p in metrics["historicalTrend"]
    )
    breakdown_rows = "".join(
        f"<tr><td>{label}</td><td class='num'>{esc(_format_score(_field(breakdown, key)))}</td></tr>"
        for label, key in (
            ("Visibility", "visibility"),
            ("Keyword Strength", "keywordStrength"),
            ("Backlinks", "backlinks"),
            ("Domain Authority", "domainAuthority"),
        )
    )
    competitor_rows = "".join(
        f"<tr><td>{esc(_format_text(_field(c, 'name')))}</td>"
        f"<td>{_bar(_field(c, 'searchScore'), '#f59e0b')}</td>"
        f"<td class='num'>{esc(_format_score(_field(c, 'searchScore')))}</td></tr>"
        for c in metrics["competitorAnalysis"]
    )
    keyword_rows = "".join(
        f"<tr><td>{esc(_format_text(_field(kw, 'keyword')))}</td>"
        f"<td class='num'>{_format_number(_field(kw, 'monthlySearchVolume'))}</td></tr>"
        for kw in metrics["keywordVolumes"]
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Brand Insights Dashboard</title>
<style>{BASE_CSS}</style>
</head>
<body>
<div class="wide">
  <div class="header">
    <a class="btn-outline" href="/">Back</a>
    <h1>Brand Insights Dashboard</h1>
    <a class="btn" href="/insights/report">Export</a>
  </div>
  <div class="card grid3">
    <div><p class="label">Brand Name</p><p class="big">{esc(details['brandName'])}</p></div>
    <div><p class="label">Website</p><p>{esc(str(details.get('brandWebsite', '')))}</p></div>
    <div><p class="label">Contact</p><p>{esc(str(details.get('contactEmail', '')))}</p></div>
  </div>
  <div class="grid2">
    <div class="card center"><p class="label">Google Visibility Score</p>
      {_gauge_svg(metrics['googleVisibility'], '#3b82f6')}<p class="muted">Out of 100</p></div>
    <div class="card center"><p class="label">Search Score</p>
      {_gauge_svg(metrics['searchScore'], '#8b5cf6')}<p class="muted">Out of 100</p></div>
  </div>
  <div class="grid2">
    <div class="card"><h3>6-Month Performance Trend</h3>
      <table><tr><th>Month</th><th>Visibility</th><th>Search Score</th></tr>{trend_rows}</table></div>
    <div class="card"><h3>Score Components Breakdown</h3>
      <table>{breakdown_rows}</table></div>
  </div>
  <div class="card"><h3>Competitor Analysis</h3>
    <table>{competitor_rows}</table></div>
  <div class="card"><h3>Top Keywords</h3>
    <table><tr><th>Keyword</th><th class="num">Monthly Search Volume</th></tr>{keyword_rows}</table></div>
</div>
</body>
</html>
"""


def _error_html(message: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Brand Insights</title>
<style>{BASE_CSS}</style>
</head>
<body>
<div class="card narrow">
  <h2>Error</h2>
  <p class="muted">{html.escape(message)}</p>
  <a class="btn" href="/">Back to Form</a>
</div>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Inline HTML: form page and shared styles
# ---------------------------------------------------------------------------

BASE_CSS = """
  *, *::before, *::after { margin: 0; padding: 0; box-sizing: border-box; }
  body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
    background: linear-gradient(135deg, #020617, #0f172a, #1e293b);
    color: #e2e8f0;
    min-height: 100vh;
    padding: 24px;
  }
  h1 { font-size: 32px; font-weight: 700; color: white; }
  h3 { font-size: 18px; margin-bottom: 12px; color: white; }
  .card { background: #1e293b; border: 1px solid #334155; border-radius: 12px; padding: 24px; margin-bottom: 24px; }
  .narrow { max-width: 440px; margin: 80px auto; }
  .wide { max-width: 1200px; margin: 0 auto; }
  .header { display: flex; align-items: center; justify-content: space-between; margin-bottom: 24px; }
  .grid2 { display: grid; grid-template-columns: 1fr 1fr; gap: 24px; }
  .grid3 { display: grid; grid-template-columns: 1fr 1fr 1fr; gap: 16px; }
  .center { text-align: center; }
  .label { font-size: 13px; text-transform: uppercase; letter-spacing: 0.06em; color: #94a3b8; margin-bottom: 6px; }
  .big { font-size: 24px; font-weight: 700; color: white; }
  .muted { color: #94a3b8; font-size: 14px; margin: 8px 0 16px; }
  .gauge { width: 160px; height: 160px; }
  table { width: 100%; border-collapse: collapse; }
  th, td { text-align: left; padding: 8px 12px; border-bottom: 1px solid #334155; font-size: 14px; }
  th { color: #94a3b8; }
  .num { text-align: right; color: #60a5fa; font-weight: 600; }
  .bar { background: #334155; border-radius: 6px; height: 10px; min-width: 120px; }
  .bar span { display: block; height: 10px; border-radius: 6px; }
  .btn, .btn-outline, button {
    display: inline-block; padding: 10px 20px; border-radius: 10px; font-size: 15px;
    font-weight: 600; text-decoration: none; cursor: pointer; border: none;
    background: #2563eb; color: white;
  }
  .btn-outline { background: #334155; border: 1px solid #475569; color: #cbd5e1; }
  button:disabled { background: #64748b; cursor: not-allowed; }
  label { display: block; font-size: 14px; font-weight: 500; color: white; margin-bottom: 6px; }
  input {
    width: 100%; padding: 10px 14px; background: #334155; border: 1px solid #475569;
    border-radius: 10px; color: white; font-size: 15px; margin-bottom: 4px;
  }
  .field { margin-bottom: 18px; }
  .field-error { color: #f87171; font-size: 13px; min-height: 16px; }
  .error-msg {
    display: none; margin-bottom: 16px; padding: 12px 16px; border-radius: 10px;
    background: rgba(239,68,68,0.1); border: 1px solid rgba(239,68,68,0.2); color: #f87171; font-size: 14px;
  }
"""

INDEX_HTML = f"""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Brand Insights</title>
<style>{BASE_CSS}</style>
</head>
<body>
<div class="narrow">
  <div class="center" style="margin-bottom:24px">
    <h1>Brand Insights</h1>
    <p class="muted">Analyze your brand's marketing performance</p>
  </div>
  <div class="card">
    <form id="form">
      <div class="field">
        <label for="brandName">Brand Name</label>
        <input type="text" id="brandName" placeholder="e.g., Zoop.one">
        <div class="field-error" id="brandName-error"></div>
      </div>
      <div class="field">
        <label for="brandWebsite">Brand Website</label>
        <input type="text" id="brandWebsite" placeholder="https://example.com">
        <div class="field-error" id="brandWebsite-error"></div>
      </div>
      <div class="field">
        <label for="contactEmail">Contact Email</label>
        <input type="email" id="contactEmail" placeholder="contact@example.com">
        <div class="field-error" id="contactEmail-error"></div>
      </div>
      <div class="error-msg" id="error"></div>
      <button type="submit" id="btn" style="width:100%">Get Brand Insights</button>
    </form>
  </div>
  <p class="muted center">We'll generate comprehensive marketing insights for your brand in seconds.</p>
</div>

<script>
const fields = ['brandName', 'brandWebsite', 'contactEmail'];
const form = document.getElementById('form');
const btn = document.getElementById('btn');
const errorEl = document.getElementById('error');

form.addEventListener('submit', async (e) => {{
  e.preventDefault();
  const body = {{}};
  fields.forEach((f) => {{
    body[f] = document.getElementById(f).value;
    document.getElementById(f + '-error').textContent = '';
  }});
  errorEl.style.display = 'none';
  btn.disabled = true;
  btn.textContent = 'Analyzing your brand...';

  try {{
    const resp = await fetch('/api/analyze', {{
      method: 'POST',
      headers: {{ 'Content-Type': 'application/json' }},
      body: JSON.stringify(body),
    }});
    const data = await resp.json();
    if (resp.ok) {{
      window.location.href = '/insights';
      return;
    }}
    if (data.errors) {{
      Object.entries(data.errors).forEach(([f, msg]) => {{
        document.getElementById(f + '-error').textContent = msg;
      }});
    }} else {{
      errorEl.textContent = data.message || 'An error occurred';
      errorEl.style.display = 'block';
    }}
  }} catch (err) {{
    errorEl.textContent = 'Connection lost. Please try again.';
    errorEl.style.display = 'block';
  }}
  btn.disabled = false;
  btn.textContent = 'Get Brand Insights';
}});
</script>
</body>
</html>
"""


app = create_app()
