from typing import Dict, List, Optional

import pytest
from playwright.async_api import Error as PWError
from playwright.async_api import TimeoutError as PWTimeout

from common.config import ScraperConfig
from scraper_types.field_extractor import ROWS_JS
from scraper_types.stabilization import ROW_COUNT_JS, SHOW_ALL_JS


class FakePage:
    """
    Stand-in for a Playwright page backed by canned DOM state.

    rows:       view path fragment -> rendered <td> texts per row
    urls:       values handed out by successive `page.url` reads, then the last one repeats
    counts:     values handed out by successive row-count probes (last one sticks)
    nav_errors: view path fragment -> exception raised by goto
    """

    def __init__(self, rows: Optional[Dict[str, List[list]]] = None, *,
                 urls: Optional[List[str]] = None,
                 counts: Optional[List[int]] = None,
                 control: bool = True,
                 table: bool = True,
                 nav_errors: Optional[Dict[str, Exception]] = None,
                 extract_error: Optional[Exception] = None):
        self.rows = rows or {}
        self.urls = list(urls or [])
        self.counts = list(counts or [])
        self.control = control
        self.table = table
        self.nav_errors = nav_errors or {}
        self.extract_error = extract_error
        self.closed = False
        self.current = "about:blank"
        self.gotos: List[dict] = []
        self.url_reads = 0
        self.show_all_calls: List[list] = []

    @property
    def url(self) -> str:
        self.url_reads += 1
        if self.urls:
            self.current = self.urls.pop(0)
        return self.current

    async def goto(self, url, wait_until=None, timeout=None):
        self.gotos.append({"url": url, "wait_until": wait_until, "timeout": timeout})
        for fragment, exc in self.nav_errors.items():
            if fragment in url:
                raise exc
        self.current = url

    async def wait_for_selector(self, selector, timeout=None):
        if not self.table:
            raise PWTimeout(f"waiting for {selector} failed: timeout {timeout}ms exceeded")
        return object()

    def _view_rows(self) -> List[list]:
        for fragment, rows in self.rows.items():
            if fragment in self.current:
                return rows
        return []

    async def evaluate(self, script, arg=None):
        if script == ROWS_JS:
            if self.extract_error:
                raise self.extract_error
            return [list(r) for r in self._view_rows()]
        if script == ROW_COUNT_JS:
            if self.counts:
                return self.counts.pop(0) if len(self.counts) > 1 else self.counts[0]
            return len(self._view_rows())
        if script == SHOW_ALL_JS:
            self.show_all_calls.append(arg)
            return self.control
        raise AssertionError(f"unexpected script: {script!r}")

    def is_closed(self) -> bool:
        return self.closed


class RecordingSink:
    def __init__(self, fail_on: Optional[str] = None):
        self.persisted = []
        self.fail_on = fail_on

    def persist(self, name, snapshot):
        if name == self.fail_on:
            raise OSError(f"disk full writing {name}")
        self.persisted.append((name, snapshot))
        return len(snapshot.records)


NUMBER_ROWS = [
    ["1", "USA Mobile", "1202", "+12025550123", "0.02", "acme"],
    ["2", "USA Mobile", "1202", "+12025550124", "0.02", ""],
    ["No data available in table"],
]

MESSAGE_ROWS = [
    ["2026-10-19 10:00:01", "USA Mobile", "+12025550123", "WhatsApp", "acme", "Your WhatsApp code 482-913"],
    ["2026-10-19 10:02:44", "USA Mobile", "+12025550124", "Facebook", "acme", "FB-58213 is your Facebook code"],
]


@pytest.fixture
def nav_error():
    return PWError("net::ERR_CONNECTION_REFUSED")


@pytest.fixture
def fast_config(tmp_path):
    """Every wait shrunk to (nearly) nothing."""
    return ScraperConfig(
        base_url="http://panel.test/ints",
        output_dir=str(tmp_path / "data"),
        login_poll_interval_ms=0,
        login_settle_ms=0,
        login_nav_timeout_ms=10,
        view_timeout_ms=10,
        table_wait_ms=10,
        widget_init_ms=0,
        numbers_settle_ms=200,
        messages_settle_ms=200,
        stability_sample_ms=1000,  # minimum; the settle caps below bound each view
        stability_floor_ms=0,
    )


@pytest.fixture
def panel_page():
    return FakePage(
        {"MySMSNumbers": NUMBER_ROWS, "SMSCDRReports": MESSAGE_ROWS},
        urls=["http://panel.test/ints/login", "http://panel.test/ints/agent/SMSDashboard"],
    )
