import dataclasses

import pytest

from dawgscan import preferences
from dawgscan.models import ClientEvidenceBundle


class FakeHeaderFetcher:
    def __init__(self, headers=None, error=None):
        self.headers = headers or []
        self.error = error
        self.calls = []

    async def fetch_headers(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.headers


class FakeEvidenceCollector:
    def __init__(self, bundle=None, error=None):
        self.bundle = bundle if bundle is not None else ClientEvidenceBundle()
        self.error = error
        self.calls = []

    async def collect(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.bundle


class FakeCookieCollector:
    def __init__(self, cookies=None, error=None):
        self.cookies = cookies or []
        self.error = error
        self.calls = []

    async def collect(self, domain):
        self.calls.append(domain)
        if self.error is not None:
            raise self.error
        return list(self.cookies)


@pytest.fixture
def prefs_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(preferences, "settings", dataclasses.replace(preferences.settings, data_dir=str(tmp_path)))
    return tmp_path
