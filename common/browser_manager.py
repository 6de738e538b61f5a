# common/browser_manager.py
from typing import Optional
from playwright.async_api import Error as PWError
from .anti_detection import create_stealth_context
from .errors import FatalSessionError

LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-infobars",
]

async def get_browser(playwright, headless: bool = False):
    """Launch Chromium with anti-detection flags. A failed launch is fatal for the run."""
    try:
        return await playwright.chromium.launch(headless=headless, args=LAUNCH_ARGS)
    except PWError as e:
        raise FatalSessionError(f"Browser launch failed: {e}") from e

async def get_stealth_page(browser, *, headless: bool = False, user_agent: Optional[str] = None):
    """Open the single page the run works in, inside a stealth context."""
    try:
        context = await create_stealth_context(browser, headless=headless, user_agent=user_agent)
        return await context.new_page()
    except PWError as e:
        raise FatalSessionError(f"Could not open a browser page: {e}") from e
