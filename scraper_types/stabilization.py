# scraper_types/stabilization.py
import asyncio
import time
from typing import Optional
from playwright.async_api import Error as PWError
from common.status import log

ROW_COUNT_JS = "(selector) => document.querySelectorAll(selector).length"

# DataTables reacts to the change event, not to the value assignment
SHOW_ALL_JS = """
([selector, value]) => {
    const select = document.querySelector(selector);
    if (!select) return false;
    select.value = value;
    select.dispatchEvent(new Event('change', { bubbles: true }));
    return true;
}
"""

async def row_count(page, row_selector: str) -> Optional[int]:
    try:
        return await page.evaluate(ROW_COUNT_JS, row_selector)
    except PWError:
        return None

async def show_all_rows(page, page_size_selector: str, show_all_value: str = "-1") -> bool:
    """Switch the page-length control to 'All'. False when the control is missing."""
    try:
        return bool(await page.evaluate(SHOW_ALL_JS, [page_size_selector, show_all_value]))
    except PWError as e:
        log(f"Could not change page size: {e}", "warning")
        return False

async def wait_until_stable(page, row_selector: str, baseline: int, upper_bound_ms: int,
                            sample_interval_ms: int = 1000, floor_ms: int = 0) -> int:
    """
    Sample the row count until two consecutive samples agree, never longer
    than upper_bound_ms. A stable count that still equals `baseline` only
    counts after floor_ms, because the re-render may not have begun yet.
    """
    start = time.monotonic()

    def elapsed_ms() -> float:
        return (time.monotonic() - start) * 1000

    previous: Optional[int] = None
    count: Optional[int] = baseline

    while elapsed_ms() < upper_bound_ms:
        await asyncio.sleep(min(sample_interval_ms, upper_bound_ms - elapsed_ms()) / 1000)
        count = await row_count(page, row_selector)
        if count is not None and count == previous:
            if count != baseline or elapsed_ms() >= floor_ms:
                return count
        previous = count
    return count if count is not None else baseline

async def materialize_full_result_set(page, row_selector: str, page_size_selector: str,
                                      expected_settle_ms: int, *,
                                      table_selector: str = "#dt",
                                      table_wait_ms: int = 20000,
                                      init_delay_ms: int = 3000,
                                      show_all_value: str = "-1",
                                      sample_interval_ms: int = 1000,
                                      stability_floor_ms: int = 5000,
                                      label: str = "rows") -> int:
    """
    Make a paginated table render every row, then wait for it to settle.
    No step here is fatal: a missing table or control just means extraction
    runs against whatever is on screen. Returns the settled row count.
    """
    try:
        await page.wait_for_selector(table_selector, timeout=table_wait_ms)
    except PWError:
        log(f"Table {table_selector} did not appear, continuing", "warning")

    await asyncio.sleep(init_delay_ms / 1000)

    baseline = await row_count(page, row_selector) or 0
    triggered = await show_all_rows(page, page_size_selector, show_all_value)
    if triggered:
        log(f"Loading all {label}... (this may take up to {expected_settle_ms // 1000} seconds)", "info")
    else:
        log("No page size control found, using the rows already rendered", "warning")

    return await wait_until_stable(
        page, row_selector, baseline, expected_settle_ms,
        sample_interval_ms=sample_interval_ms,
        floor_ms=stability_floor_ms if triggered else 0,
    )
