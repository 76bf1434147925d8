import logging
from typing import Dict, List, Optional, Type

from browser_utils import ExecutableCheck, PlatformProbe
from config import AppSettings

from .base_finder import BaseBrowserFinder
from .chrome_finder import ChromeFinder
from .edge_finder import EdgeFinder
from .firefox_finder import FirefoxFinder

logger = logging.getLogger("BrowserFinder.Factory")

AVAILABLE_FINDERS: Dict[str, Type[BaseBrowserFinder]] = {
    ChromeFinder.name: ChromeFinder,
    EdgeFinder.name: EdgeFinder,
    FirefoxFinder.name: FirefoxFinder,
}


def available_finders() -> List[str]:
    return list(AVAILABLE_FINDERS)


class BrowserFinderFactory:
    @staticmethod
    def create_finder(name: str,
                      platform_probe: PlatformProbe,
                      is_executable: Optional[ExecutableCheck] = None,
                      app_settings: Optional[AppSettings] = None) -> BaseBrowserFinder:
        """
        Creates the finder registered under name.
        Raises ValueError for names that are not registered.
        """
        finder_class = AVAILABLE_FINDERS.get(name)
        if finder_class is None:
            logger.error(f"Unknown browser finder specified: {name}")
            raise ValueError(f"Unknown browser finder: {name}. Available finders: {', '.join(AVAILABLE_FINDERS)}")

        return finder_class(platform_probe, is_executable=is_executable, app_settings=app_settings)
