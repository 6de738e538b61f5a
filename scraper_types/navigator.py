# scraper_types/navigator.py
from playwright.async_api import Error as PWError
from common.errors import NavigationError

def join_url(base_url: str, view_path: str) -> str:
    return base_url.rstrip("/") + "/" + view_path.lstrip("/")

async def open_view(page, base_url: str, view_path: str, timeout_ms: int = 30000) -> None:
    """
    Navigate to a view, waiting for DOMContentLoaded only: the data table is
    filled by an XHR after the document is parsed.
    Raises NavigationError on timeout or a rejected navigation.
    """
    url = join_url(base_url, view_path)
    try:
        await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
    except PWError as e:
        # TimeoutError subclasses Error
        raise NavigationError(url, e) from e
