# common/anti_detection.py
import random
from typing import Any, Dict, Optional

USER_AGENTS = [
    # Windows Chrome
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    # Mac Chrome
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36",
    # Linux Chrome
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0.6261.94 Safari/537.36",
]

WEBDRIVER_PATCH = "Object.defineProperty(navigator, 'webdriver', {get: () => undefined})"

def context_options(*, headless: bool, user_agent: Optional[str] = None) -> Dict[str, Any]:
    """
    Options for the panel's browser context.
    Headful runs hand the window to an operator for login, so the page follows
    the real window size. Headless runs get a randomized desktop viewport,
    never under 1280px wide, where the DataTables layout keeps every column.
    """
    opts: Dict[str, Any] = {
        "user_agent": user_agent or random.choice(USER_AGENTS),
        "locale": "en-US",
    }
    if headless:
        opts["viewport"] = {
            "width": random.randint(1280, 1600),
            "height": random.randint(720, 900),
        }
    else:
        opts["no_viewport"] = True
    return opts

async def create_stealth_context(browser, *, headless: bool = False, user_agent: Optional[str] = None):
    context = await browser.new_context(**context_options(headless=headless, user_agent=user_agent))
    await context.add_init_script(WEBDRIVER_PATCH)
    return context
