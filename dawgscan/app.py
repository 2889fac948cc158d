"""DawgScan - FastAPI backend for passive security header and technology classification."""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from dawgscan import __version__, preferences
from dawgscan.checks.client_markers import probe_plan
from dawgscan.collectors import (
    MarkupEvidenceCollector,
    PageFetcher,
    ResponseCookieCollector,
    StaticCookieCollector,
    StaticEvidenceCollector,
)
from dawgscan.config import settings
from dawgscan.exceptions import DawgScanError
from dawgscan.models import ClientEvidenceBundle, CookieSummary, ScanConfiguration, ScanReport
from dawgscan.report_html import render_report_html
from dawgscan.scanner import run_scan

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="DawgScan API",
    description="Passive classifier for missing security headers, server stack and client-side technologies.",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DawgScanError)
async def dawgscan_error_handler(request: Request, exc: DawgScanError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


class ScanRequest(BaseModel):
    url: str
    config: Optional[ScanConfiguration] = None
    evidence: Optional[ClientEvidenceBundle] = None
    cookies: Optional[List[CookieSummary]] = None


class PreferenceUpdate(BaseModel):
    enabled: bool


async def _scan(request: ScanRequest) -> ScanReport:
    fetcher = PageFetcher()
    if request.evidence is not None:
        evidence_collector = StaticEvidenceCollector(request.evidence)
    else:
        evidence_collector = MarkupEvidenceCollector(fetcher)
    if request.cookies is not None:
        cookie_collector = StaticCookieCollector(request.cookies)
    else:
        cookie_collector = ResponseCookieCollector(fetcher)
    config = request.config or preferences.load_preferences()
    return await run_scan(request.url, fetcher, evidence_collector, cookie_collector, config)


@app.post("/scan", response_model=ScanReport)
async def scan(request: ScanRequest):
    return await _scan(request)


@app.post("/scan/html", response_class=HTMLResponse)
async def scan_html(request: ScanRequest):
    report = await _scan(request)
    return HTMLResponse(content=render_report_html(report))


@app.get("/probes")
async def probes():
    """Globals and selectors a browser-side collector should evaluate."""
    return probe_plan()


@app.get("/preferences", response_model=ScanConfiguration)
async def get_preferences():
    return preferences.load_preferences()


@app.put("/preferences/{name}", response_model=ScanConfiguration)
async def put_preference(name: str, update: PreferenceUpdate):
    config = preferences.set_preference(name, update.enabled)
    logger.info("preference %s set to %s", name, update.enabled)
    return config


@app.delete("/preferences", response_model=ScanConfiguration)
async def delete_preferences():
    return preferences.reset_preferences()


@app.get("/")
async def root():
    return {"status": "ok", "service": "DawgScan API", "version": __version__}


@app.get("/health")
async def health():
    return {"status": "healthy"}
