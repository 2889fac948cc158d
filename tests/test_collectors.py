import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port

from dawgscan.checks.cookies import parse_set_cookie
from dawgscan.collectors import (
    MarkupEvidenceCollector,
    PageFetcher,
    PageSnapshot,
    ResponseCookieCollector,
    StaticCookieCollector,
    StaticEvidenceCollector,
    evidence_from_markup,
    find_dom_hits,
)
from dawgscan.exceptions import EvidenceCollectionError, FetchFailedError
from dawgscan.models import ClientEvidenceBundle, CookieSummary
from dawgscan.scanner import run_scan

PAGE = """<!DOCTYPE html>
<html lang="en" ng-app="shop">
<head>
  <meta name="generator" content="WordPress 6.4.2" />
  <script src="https://code.jquery.com/jquery-3.6.0.min.js"></script>
  <script type="text/javascript" src='/wp-content/themes/t/js/bootstrap.bundle.min.js' defer></script>
  <script>window.dataLayer = [];</script>
</head>
<body>
  <div id="__next" data-reactroot=""></div>
  <div id="__nextish"></div>
  <button data-bs-toggle="modal">Open</button>
</body>
</html>
"""


def test_markup_bundle():
    bundle = evidence_from_markup(PAGE)
    assert bundle.scripts == (
        "https://code.jquery.com/jquery-3.6.0.min.js",
        "/wp-content/themes/t/js/bootstrap.bundle.min.js",
    )
    assert bundle.generator == "WordPress 6.4.2"
    assert bundle.global_probes == {}
    assert bundle.dom_hits == frozenset({"[ng-app]", "[id=__next]", "[data-reactroot]", "[data-bs-toggle]"})


def test_generator_with_content_first():
    bundle = evidence_from_markup('<meta content="Hugo 0.121.0" name="generator">')
    assert bundle.generator == "Hugo 0.121.0"


def test_dom_hits_require_whole_attribute_names():
    body = '<div data-vue-meta="1"></div><span x-data="{open: false}"></span>'
    assert find_dom_hits(body, ["[data-vue]", "[x-data]"]) == frozenset({"[x-data]"})


def test_page_collectors_without_fetched_page_raise():
    fetcher = PageFetcher()
    with pytest.raises(EvidenceCollectionError):
        asyncio.run(MarkupEvidenceCollector(fetcher).collect("https://example.com"))
    with pytest.raises(EvidenceCollectionError):
        asyncio.run(ResponseCookieCollector(fetcher).collect("example.com"))


def test_collectors_read_the_fetched_page():
    fetcher = PageFetcher()
    fetcher.page = PageSnapshot(
        url="https://example.com",
        status=200,
        raw_cookies=["sid=abc; Secure; HttpOnly; SameSite=Lax"],
        body=PAGE,
    )
    bundle = asyncio.run(MarkupEvidenceCollector(fetcher).collect("https://example.com"))
    assert bundle.generator == "WordPress 6.4.2"
    cookies = asyncio.run(ResponseCookieCollector(fetcher).collect("example.com"))
    assert cookies == [CookieSummary(name="sid", value="abc", secure=True, http_only=True, same_site="Lax")]


def test_static_collectors_hand_back_input():
    bundle = ClientEvidenceBundle(global_probes={"Vue": "3.4.0"})
    assert asyncio.run(StaticEvidenceCollector(bundle).collect("https://example.com")) is bundle
    cookie = CookieSummary(name="sid", secure=True, httpOnly=True, sameSite="Strict")
    assert asyncio.run(StaticCookieCollector([cookie]).collect("example.com")) == [cookie]


def test_parse_set_cookie_flags():
    cookies = parse_set_cookie([
        "sid=abc123; Path=/; Secure; HttpOnly; SameSite=Strict",
        "theme=dark; Path=/; Expires=Wed, 21 Oct 2026 07:28:00 GMT",
    ])
    assert cookies == [
        CookieSummary(name="sid", value="abc123", secure=True, http_only=True, same_site="Strict"),
        CookieSummary(name="theme", value="dark", secure=False, http_only=False, same_site=""),
    ]


def test_parse_set_cookie_no_headers():
    assert parse_set_cookie([]) == []


LIVE_PAGE = """<html><head>
<script src="/static/js/jquery-3.6.0.min.js"></script>
<img data-src="/lazy/react-hero.js">
</head><body></body></html>"""


def make_site():
    async def home(request):
        resp = web.Response(text=LIVE_PAGE, content_type="text/html", headers={"Server": "nginx/1.18.0 (Ubuntu)"})
        resp.set_cookie("sid", "abc", secure=True, httponly=True, samesite="Strict")
        return resp

    async def broken(request):
        return web.Response(status=500, text="boom")

    async def slow(request):
        await asyncio.sleep(1)
        return web.Response(text="late")

    site = web.Application()
    site.router.add_get("/", home)
    site.router.add_get("/broken", broken)
    site.router.add_get("/slow", slow)
    return site


async def scan_local_site(path, fetcher):
    server = TestServer(make_site())
    await server.start_server()
    try:
        return await run_scan(
            str(server.make_url(path)),
            fetcher,
            MarkupEvidenceCollector(fetcher),
            ResponseCookieCollector(fetcher),
        )
    finally:
        await server.close()


def test_page_fetcher_against_local_site():
    fetcher = PageFetcher(verify_tls=False)
    report = asyncio.run(scan_local_site("/", fetcher))

    assert report.error is None
    assert fetcher.page is not None and fetcher.page.status == 200
    assert [(f.key, f.value, f.link) for f in report.server] == [
        ("Server", "nginx/1.18.0 (Ubuntu)", "https://nginx.org/"),
    ]
    assert len(report.missing_headers) == 5
    assert [t.label for t in report.libraries] == ["jQuery"]
    assert report.technologies == []
    assert report.cookies == [
        CookieSummary(name="sid", value="abc", secure=True, http_only=True, same_site="Strict"),
    ]


def test_page_fetcher_server_error_ends_scan():
    fetcher = PageFetcher(verify_tls=False)
    report = asyncio.run(scan_local_site("/broken", fetcher))

    assert report.error.kind == "FetchFailed"
    assert report.error.status == 500
    assert report.error.message == "Failed to fetch headers: 500 Internal Server Error"
    assert len(report.missing_headers) == 5
    assert report.server == [] and report.libraries == [] and report.technologies == []
    assert report.cookies == []
    assert fetcher.page is None


def test_page_fetcher_timeout_is_a_fetch_failure():
    fetcher = PageFetcher(timeout=0.2, verify_tls=False)
    report = asyncio.run(scan_local_site("/slow", fetcher))

    assert report.error.kind == "FetchFailed"
    assert report.error.status is None
    assert fetcher.page is None


def test_page_fetcher_connection_refused():
    fetcher = PageFetcher(timeout=5, verify_tls=False)
    url = f"http://127.0.0.1:{unused_port()}/"
    with pytest.raises(FetchFailedError) as excinfo:
        asyncio.run(fetcher.fetch_headers(url))
    assert excinfo.value.status is None
    assert excinfo.value.message.startswith("Error fetching headers: ")
    assert fetcher.page is None


def test_script_scan_ignores_data_src():
    body = '<script data-src="/lazy/vue.js"></script><script defer src="/app.js"></script><script\nsrc="/b.js"></script>'
    assert evidence_from_markup(body).scripts == ("/app.js", "/b.js")
