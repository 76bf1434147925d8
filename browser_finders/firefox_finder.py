from .base_finder import AutomationProtocol, BaseBrowserFinder


class FirefoxFinder(BaseBrowserFinder):
    name = "firefox"
    display_name = "Firefox"
    accepted_protocols = frozenset({AutomationProtocol.FIREFOX})

    darwin_bundles = (
        ("Firefox Nightly", "firefox"),
        ("Firefox Developer Edition", "firefox"),
        ("Firefox", "firefox"),
    )
    linux_paths = (
        "/opt/firefox-nightly/firefox",
        "/opt/firefox-developer-edition/firefox",
        "/usr/bin/firefox-developer-edition",
        "/usr/bin/firefox",
        "/snap/bin/firefox",
    )
    win32_suffixes = (
        ("Firefox Nightly", "firefox.exe"),
        ("Firefox Developer Edition", "firefox.exe"),
        ("Mozilla Firefox", "firefox.exe"),
    )
