"""Cookie attributes: Secure, HttpOnly and SameSite, passed through as observed."""

import logging
from http.cookies import CookieError, SimpleCookie
from typing import Iterable, List, Sequence

from dawgscan.models import CookieSummary

logger = logging.getLogger(__name__)


def parse_set_cookie(raw_cookies: Iterable[str]) -> List[CookieSummary]:
    """Turn raw ``Set-Cookie`` header values into cookie summaries."""
    summaries = []
    for raw in raw_cookies:
        jar: SimpleCookie = SimpleCookie()
        try:
            jar.load(raw)
        except CookieError:
            logger.debug("unparseable Set-Cookie value skipped: %r", raw[:80])
            continue
        for name, morsel in jar.items():
            summaries.append(CookieSummary(
                name=name,
                value=morsel.value,
                secure=bool(morsel["secure"]),
                http_only=bool(morsel["httponly"]),
                same_site=morsel["samesite"] or "",
            ))
    return summaries


async def run_all(cookies: Sequence[CookieSummary]) -> List[CookieSummary]:
    return list(cookies)
