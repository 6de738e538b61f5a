# scraper_types/session_handoff.py
import asyncio
from urllib.parse import urlparse
from playwright.async_api import Error as PWError
from common.status import log

def _path(url: str) -> str:
    return urlparse(url or "").path.lower()

def is_authenticated(current_url: str, login_url: str) -> bool:
    """Logged in once the location has left the login view (case-insensitive path match)."""
    if not current_url or current_url.startswith("about:"):
        return False
    return _path(login_url) not in _path(current_url)

async def await_authenticated_session(page, login_url: str, poll_interval_ms: int = 2000,
                                      settle_delay_ms: int = 3000, *,
                                      nav_timeout_ms: int = 60000) -> bool:
    """
    Open the login view and block until a human has logged in out-of-band.
    No timeout: the operator gates this step. Always returns True.
    """
    log("Waiting for you to login...", "warning")
    try:
        await page.goto(login_url, wait_until="domcontentloaded", timeout=nav_timeout_ms)
    except PWError:
        # session may already be authenticated, or the view redirected
        pass

    while True:
        await asyncio.sleep(poll_interval_ms / 1000)
        if is_authenticated(page.url, login_url):
            log("Login detected!", "success")
            await asyncio.sleep(settle_delay_ms / 1000)
            return True
