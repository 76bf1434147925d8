import os
from typing import List

from .base_finder import AutomationProtocol, BaseBrowserFinder


class ChromeFinder(BaseBrowserFinder):
    name = "chrome"
    display_name = "Chrome"
    accepted_protocols = frozenset({AutomationProtocol.CHROME, AutomationProtocol.CHROME_CDP})

    darwin_bundles = (
        ("Google Chrome Canary", "Google Chrome Canary"),
        ("Google Chrome Dev", "Google Chrome Dev"),
        ("Google Chrome Beta", "Google Chrome Beta"),
        ("Google Chrome", "Google Chrome"),
    )
    linux_paths = (
        "/opt/google/chrome-canary/chrome",
        "/opt/google/chrome-unstable/chrome",
        "/opt/google/chrome-beta/chrome",
        "/opt/google/chrome/chrome",
        "/usr/bin/chromium-browser",
        "/usr/bin/chromium",
        "/snap/bin/chromium",
    )
    win32_suffixes = (
        ("Google", "Chrome SxS", "Application", "chrome.exe"),
        ("Google", "Chrome Dev", "Application", "chrome.exe"),
        ("Google", "Chrome Beta", "Application", "chrome.exe"),
        ("Google", "Chrome", "Application", "chrome.exe"),
    )

    def linux_candidates(self) -> List[str]:
        paths = super().linux_candidates()

        # CHROME_PATH wins over the packaged locations on Linux
        chrome_path = os.environ.get("CHROME_PATH")
        if chrome_path:
            paths.insert(0, chrome_path)

        return paths
