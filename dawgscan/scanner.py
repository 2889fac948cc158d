"""Scan orchestration: one header fetch, then every classifier concurrently."""

import asyncio
import logging
import re
import time
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from dawgscan.checks import client_markers, cookies, headers, server_stack
from dawgscan.collectors import ClientEvidenceCollector, CookieCollector, HeaderFetcher
from dawgscan.config import settings
from dawgscan.exceptions import EvidenceCollectionError, FetchFailedError, TargetUnavailableError
from dawgscan.models import (
    ClientEvidenceBundle,
    CookieSummary,
    ScanConfiguration,
    ScanErrorInfo,
    ScanReport,
    TechnologyMatch,
)

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")
# "scheme:" but not "host:port"
SCHEME_PREFIX = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:(?!\d)")


def resolve_target(target: Optional[str]) -> Tuple[str, str, str]:
    """Normalise ``target`` and return ``(url, hostname, scheme)``.

    A bare host gets ``https://``. Raises TargetUnavailableError when no
    fetchable page URL can be derived.
    """
    url = (target or "").strip()
    if not url:
        raise TargetUnavailableError(target, "Could not retrieve the active page URL")
    if not SCHEME_PREFIX.match(url):
        url = f"https://{url}"
    parsed = urlparse(url)
    if parsed.scheme.lower() not in SUPPORTED_SCHEMES:
        raise TargetUnavailableError(target, f"Unsupported URL scheme '{parsed.scheme}'")
    if not parsed.hostname:
        raise TargetUnavailableError(target, "Invalid URL")
    return url, parsed.hostname, parsed.scheme.lower()


async def _nothing() -> list:
    return []


async def _collect_evidence(collector: ClientEvidenceCollector, url: str) -> ClientEvidenceBundle:
    try:
        bundle = await asyncio.wait_for(collector.collect(url), timeout=settings.scan_timeout)
    except (EvidenceCollectionError, asyncio.TimeoutError) as e:
        logger.debug("client evidence collection failed for %s: %s", url, e, exc_info=True)
        return ClientEvidenceBundle()
    except Exception as e:
        logger.warning("client evidence collector crashed for %s: %s", url, e, exc_info=True)
        return ClientEvidenceBundle()
    return bundle or ClientEvidenceBundle()


async def _collect_cookies(collector: CookieCollector, domain: str) -> List[CookieSummary]:
    try:
        collected = await asyncio.wait_for(collector.collect(domain), timeout=settings.scan_timeout)
    except (EvidenceCollectionError, asyncio.TimeoutError) as e:
        logger.debug("cookie collection failed for %s: %s", domain, e, exc_info=True)
        return []
    except Exception as e:
        logger.warning("cookie collector crashed for %s: %s", domain, e, exc_info=True)
        return []
    return await cookies.run_all(collected or [])


async def _client_markers(collector: ClientEvidenceCollector, url: str,
                          config: ScanConfiguration) -> Tuple[List[TechnologyMatch], List[TechnologyMatch]]:
    if not (config.technologies or config.libraries):
        return [], []
    evidence = await _collect_evidence(collector, url)
    technologies, libraries = await asyncio.gather(
        client_markers.run_technologies(evidence) if config.technologies else _nothing(),
        client_markers.run_libraries(evidence) if config.libraries else _nothing(),
    )
    return technologies, libraries


async def run_scan(target: Optional[str], header_fetcher: HeaderFetcher,
                   evidence_collector: ClientEvidenceCollector, cookie_collector: CookieCollector,
                   config: Optional[ScanConfiguration] = None) -> ScanReport:
    """Run one scan and return its report.

    A failed header fetch is recorded on the report and ends evidence
    gathering: the missing-header section is still filled against an empty
    header set, every other section stays empty.
    """
    config = config or ScanConfiguration()
    start = time.time()
    url, hostname, scheme = resolve_target(target)
    report = ScanReport(url=url, config=config, protocol=scheme if config.protocol else None)
    logger.info("scan started url=%s", url)

    try:
        received = list(await header_fetcher.fetch_headers(url))
    except FetchFailedError as e:
        logger.warning("header fetch failed url=%s status=%s reason=%s", url, e.status, e.reason)
        report.error = ScanErrorInfo(kind="FetchFailed", message=e.message, status=e.status)
        received = None
    except Exception as e:
        logger.warning("header fetch failed url=%s error=%s", url, e)
        report.error = ScanErrorInfo(kind="FetchFailed", message=f"Error fetching headers: {type(e).__name__}: {e}")
        received = None

    if received is None:
        if config.headers:
            report.missing_headers = await headers.run_all([])
        report.scan_time_seconds = round(time.time() - start, 2)
        return report

    missing, server, (technologies, libraries), cookie_list = await asyncio.gather(
        headers.run_all(received) if config.headers else _nothing(),
        server_stack.run_all(received) if config.server else _nothing(),
        _client_markers(evidence_collector, url, config),
        _collect_cookies(cookie_collector, hostname) if config.cookies else _nothing(),
    )

    report.missing_headers = missing
    report.server = server
    report.technologies = technologies
    report.libraries = libraries
    report.cookies = cookie_list
    report.scan_time_seconds = round(time.time() - start, 2)
    logger.info(
        "scan finished url=%s missing=%d server=%d technologies=%d libraries=%d cookies=%d",
        url, len(missing), len(server), len(technologies), len(libraries), len(cookie_list),
    )
    return report
