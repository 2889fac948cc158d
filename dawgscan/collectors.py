"""Evidence collaborators: the header fetch, client markers and cookies.

The aggregator only depends on the three protocols below. ``PageFetcher``
performs the single GET a scan is allowed; the markup and cookie collectors
read from the page it kept, so a scan never touches the network twice.
"""

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple

import aiohttp

from dawgscan.checks.cookies import parse_set_cookie
from dawgscan.config import settings
from dawgscan.exceptions import EvidenceCollectionError, FetchFailedError
from dawgscan.models import ClientEvidenceBundle, CookieSummary, HeaderSet
from dawgscan.signatures import RULE_SETS

logger = logging.getLogger(__name__)

SCRIPT_SRC = re.compile(r'<script[^>]*\ssrc=["\']([^"\']+)["\'][^>]*>', re.I)
META_GENERATOR = re.compile(r'<meta[^>]+name=["\']generator["\'][^>]+content=["\']([^"\']*)', re.I)
META_GENERATOR_REVERSED = re.compile(r'<meta[^>]+content=["\']([^"\']*)["\'][^>]+name=["\']generator["\']', re.I)
ATTRIBUTE_SELECTOR = re.compile(r'^\[([\w:.-]+)(?:=["\']?([^"\'\]]*)["\']?)?\]$')


class HeaderFetcher(Protocol):
    async def fetch_headers(self, url: str) -> HeaderSet:
        ...


class ClientEvidenceCollector(Protocol):
    async def collect(self, url: str) -> ClientEvidenceBundle:
        ...


class CookieCollector(Protocol):
    async def collect(self, domain: str) -> List[CookieSummary]:
        ...


@dataclass
class PageSnapshot:
    url: str
    status: int
    headers: List[Tuple[str, str]] = field(default_factory=list)
    raw_cookies: List[str] = field(default_factory=list)
    body: str = ""


class PageFetcher:
    """Fetch the target once and keep what the other collectors need."""

    def __init__(self, timeout: Optional[float] = None, verify_tls: Optional[bool] = None,
                 user_agent: Optional[str] = None, max_body_bytes: Optional[int] = None):
        self.timeout = settings.fetch_timeout if timeout is None else timeout
        self.verify_tls = settings.verify_tls if verify_tls is None else verify_tls
        self.user_agent = user_agent or settings.user_agent
        self.max_body_bytes = settings.max_body_bytes if max_body_bytes is None else max_body_bytes
        self.page: Optional[PageSnapshot] = None

    async def fetch_headers(self, url: str) -> HeaderSet:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout, headers={"User-Agent": self.user_agent}) as session:
                async with session.get(url, allow_redirects=True, ssl=self.verify_tls) as resp:
                    if not 200 <= resp.status < 300:
                        raise FetchFailedError(url, resp.reason or "", status=resp.status)
                    headers = [(str(k), v) for k, v in resp.headers.items()]
                    raw_cookies = resp.headers.getall("set-cookie", [])
                    body = await resp.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchFailedError(url, f"{type(e).__name__}: {e}") from e

        self.page = PageSnapshot(
            url=url,
            status=resp.status,
            headers=headers,
            raw_cookies=list(raw_cookies),
            body=body[:self.max_body_bytes],
        )
        return headers


def _selector_pattern(selector: str) -> Optional[re.Pattern]:
    m = ATTRIBUTE_SELECTOR.match(selector)
    if not m:
        return None
    attr, value = m.group(1), m.group(2)
    if value is None:
        return re.compile(r'<[a-zA-Z][^>]*\s' + re.escape(attr) + r'(?=[\s=/>])', re.I)
    return re.compile(
        r'<[a-zA-Z][^>]*\s' + re.escape(attr) + r'\s*=\s*["\']?' + re.escape(value) + r'(?=["\'\s/>])',
        re.I,
    )


def find_dom_hits(body: str, selectors: Sequence[str]) -> frozenset:
    hits = set()
    for selector in selectors:
        pattern = _selector_pattern(selector)
        if pattern is not None and pattern.search(body):
            hits.add(selector)
    return frozenset(hits)


def evidence_from_markup(body: str) -> ClientEvidenceBundle:
    """Build a bundle from static HTML.

    Globals only exist in a live page, so ``global_probes`` stays empty.
    """
    generator = META_GENERATOR.search(body) or META_GENERATOR_REVERSED.search(body)
    selectors = [rule.selector for rules in RULE_SETS for rule in rules.dom]
    return ClientEvidenceBundle(
        dom_hits=find_dom_hits(body, selectors),
        scripts=tuple(SCRIPT_SRC.findall(body)),
        generator=generator.group(1) if generator else None,
    )


class MarkupEvidenceCollector:
    def __init__(self, fetcher: PageFetcher):
        self.fetcher = fetcher

    async def collect(self, url: str) -> ClientEvidenceBundle:
        if self.fetcher.page is None:
            raise EvidenceCollectionError(f"No fetched page to read markup from: {url}", details={"url": url})
        return evidence_from_markup(self.fetcher.page.body)


class ResponseCookieCollector:
    def __init__(self, fetcher: PageFetcher):
        self.fetcher = fetcher

    async def collect(self, domain: str) -> List[CookieSummary]:
        if self.fetcher.page is None:
            raise EvidenceCollectionError(f"No fetched page to read cookies from: {domain}", details={"domain": domain})
        return parse_set_cookie(self.fetcher.page.raw_cookies)


class StaticEvidenceCollector:
    """Hands back a bundle gathered in the page by a browser-side collector."""

    def __init__(self, bundle: ClientEvidenceBundle):
        self.bundle = bundle

    async def collect(self, url: str) -> ClientEvidenceBundle:
        return self.bundle


class StaticCookieCollector:
    def __init__(self, cookies: Sequence[CookieSummary]):
        self.cookies = list(cookies)

    async def collect(self, domain: str) -> List[CookieSummary]:
        return list(self.cookies)
