from .base_finder import AutomationProtocol, BaseBrowserFinder


class EdgeFinder(BaseBrowserFinder):
    name = "edge"
    display_name = "Edge"
    accepted_protocols = frozenset({AutomationProtocol.CHROME, AutomationProtocol.CHROME_CDP})

    darwin_bundles = (
        ("Microsoft Edge Canary", "Microsoft Edge Canary"),
        ("Microsoft Edge Dev", "Microsoft Edge Dev"),
        ("Microsoft Edge Beta", "Microsoft Edge Beta"),
        ("Microsoft Edge", "Microsoft Edge"),
    )
    linux_paths = (
        "/opt/microsoft/msedge-canary/msedge",
        "/opt/microsoft/msedge-dev/msedge",
        "/opt/microsoft/msedge-beta/msedge",
        "/opt/microsoft/msedge/msedge",
    )
    win32_suffixes = (
        ("Microsoft", "Edge SxS", "Application", "msedge.exe"),
        ("Microsoft", "Edge Dev", "Application", "msedge.exe"),
        ("Microsoft", "Edge Beta", "Application", "msedge.exe"),
        ("Microsoft", "Edge", "Application", "msedge.exe"),
    )
