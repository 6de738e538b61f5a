# common/errors.py
from typing import Optional


class ScraperError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NavigationError(ScraperError):
    """A view could not be opened; that view yields an empty snapshot."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        super().__init__(f"Navigation to {url} failed: {cause}")


class ExtractionError(ScraperError):
    """DOM access was lost while reading rows; same policy as NavigationError."""

    def __init__(self, selector: str, cause: Optional[BaseException] = None):
        self.selector = selector
        self.cause = cause
        super().__init__(f"Extraction of '{selector}' failed: {cause}")


class FatalSessionError(ScraperError):
    """The browser session could not be launched or died. Aborts the run."""
