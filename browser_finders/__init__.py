from .base_finder import (
    AutomationProtocol,
    BaseBrowserFinder,
    BrowserFinderOptions,
    BrowserFinderResult,
    BrowserNotFoundError,
)
from .chrome_finder import ChromeFinder
from .edge_finder import EdgeFinder
from .firefox_finder import FirefoxFinder
from .finder_registry import AVAILABLE_FINDERS, BrowserFinderFactory, available_finders

__all__ = [
    "AVAILABLE_FINDERS",
    "AutomationProtocol",
    "BaseBrowserFinder",
    "BrowserFinderFactory",
    "BrowserFinderOptions",
    "BrowserFinderResult",
    "BrowserNotFoundError",
    "ChromeFinder",
    "EdgeFinder",
    "FirefoxFinder",
    "available_finders",
]
