# scrapers/sms_panel_scraper.py
from typing import Dict, Optional
from playwright.async_api import Error as PWError, async_playwright
from common.browser_manager import get_browser, get_stealth_page
from common.config import ScraperConfig
from common.db_utils import SnapshotSink
from common.errors import ExtractionError, FatalSessionError, NavigationError
from common.status import RULE, log
from scraper_types.field_extractor import (
    ColumnMap, MESSAGES_COLUMNS, NUMBERS_COLUMNS, extract_records,
)
from scraper_types.navigator import join_url, open_view
from scraper_types.session_handoff import await_authenticated_session
from scraper_types.stabilization import materialize_full_result_set
from schemas import Snapshot


class SmsPanelScraper:
    """
    Takes one full snapshot of the numbers view and the messages view from an
    already-open page. Owns no browser: `main` launches and closes it.
    """

    def __init__(self, config: ScraperConfig, sink: SnapshotSink):
        self.config = config
        self.sink = sink

    async def fetch_view(self, page, name: str, path: str, columns: ColumnMap,
                         settle_ms: int) -> Snapshot:
        cfg = self.config
        log(f"Fetching {name}...")
        try:
            await open_view(page, cfg.base_url, path, cfg.view_timeout_ms)
            await materialize_full_result_set(
                page, cfg.row_selector, cfg.page_size_selector, settle_ms,
                table_selector=cfg.table_selector,
                table_wait_ms=cfg.table_wait_ms,
                init_delay_ms=cfg.widget_init_ms,
                show_all_value=cfg.show_all_value,
                sample_interval_ms=cfg.stability_sample_ms,
                stability_floor_ms=cfg.stability_floor_ms,
                label=name,
            )
            records = await extract_records(page, cfg.row_selector, columns)
        except (NavigationError, ExtractionError) as e:
            if page.is_closed():
                raise FatalSessionError(f"Browser session lost while fetching {name}") from e
            log(f"Failed to fetch {name}: {e.message}", "error")
            return Snapshot.failed()

        log(f"Found {len(records)} {name}", "success" if records else "warning")
        return Snapshot(success=True, records=records)

    async def run_once(self, page) -> Dict[str, Snapshot]:
        cfg = self.config
        await await_authenticated_session(
            page, join_url(cfg.base_url, cfg.login_path),
            cfg.login_poll_interval_ms, cfg.login_settle_ms,
            nav_timeout_ms=cfg.login_nav_timeout_ms,
        )

        log()
        log("Starting update...", "success")
        log(RULE)

        views = [
            ("numbers", cfg.numbers_path, NUMBERS_COLUMNS, cfg.numbers_settle_ms),
            ("messages", cfg.messages_path, MESSAGES_COLUMNS, cfg.messages_settle_ms),
        ]
        results: Dict[str, Snapshot] = {}
        for name, path, columns, settle_ms in views:
            snapshot = await self.fetch_view(page, name, path, columns, settle_ms)
            # persisted right away so a later crash keeps this view's output
            try:
                self.sink.persist(name, snapshot)
            except OSError as e:
                log(f"Failed to save {name}: {e}", "error")
            results[name] = snapshot
        return results


async def main(config: Optional[ScraperConfig] = None,
               sink: Optional[SnapshotSink] = None) -> Optional[Dict[str, Snapshot]]:
    config = config or ScraperConfig.from_env()
    sink = sink or SnapshotSink(config.output_dir)
    scraper = SmsPanelScraper(config, sink)

    async with async_playwright() as p:
        browser = None
        try:
            log("Starting browser...")
            browser = await get_browser(p, headless=config.headless)
            page = await get_stealth_page(browser, headless=config.headless, user_agent=config.user_agent)
            log("Browser started", "success")
            log()
            log("👉 PLEASE LOGIN MANUALLY NOW!", "warning")
            log("1. Login to the platform in the opened browser")
            log("2. Wait for the dashboard to load")
            log("3. Come back here - the scraper starts automatically")
            log()

            results = await scraper.run_once(page)
            log("Update completed", "success")
            return results
        except FatalSessionError as e:
            log(f"Scraper error: {e.message}", "error")
            return None
        finally:
            if browser:
                log("Closing browser...")
                try:
                    await browser.close()
                except PWError as e:
                    log(f"Browser close failed: {e}", "warning")
