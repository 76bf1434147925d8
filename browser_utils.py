"""
Platform detection and executable path utilities for cross-platform support.
"""
import asyncio
import functools
import logging
import os
import platform
import plistlib
import sys
from enum import Enum
from typing import Awaitable, Callable, Iterable, Optional

from wsl_utils import NetworkingMode, WSLBridge

logger = logging.getLogger("BrowserFinder.Platform")

ExecutableCheck = Callable[[str], Awaitable[bool]]

WINDOWS_EXECUTABLE_SUFFIXES = (".exe", ".bat", ".cmd")


class Platform(str, Enum):
    DARWIN = "darwin"
    LINUX = "linux"
    WIN32 = "win32"
    WSL1 = "wsl1"
    WSL2 = "wsl2"


def _system_platform() -> str:
    return sys.platform


def _read_proc_version() -> str:
    try:
        with open("/proc/version", encoding="utf-8") as f:
            return f.read()
    except OSError:
        return ""


def detect_wsl_generation(kernel_release: str, proc_version: str = "") -> int:
    """
    Returns 0 outside WSL, otherwise the WSL generation (1 or 2).
    WSL2 kernels are named like '5.15.90.1-microsoft-standard-WSL2',
    WSL1 reports the Windows build, e.g. '4.4.0-19041-Microsoft'.
    """
    release = kernel_release.lower()
    version = proc_version.lower()
    if "microsoft" not in release and "microsoft" not in version:
        return 0
    if "wsl2" in release or "microsoft-standard" in release or "wsl2" in version:
        return 2
    return 1


class PlatformProbe:
    """
    Works out which platform discovery runs on. Pass `platform` (and
    `networking_mode`) to pin the answers instead of inspecting the machine.
    """

    def __init__(self,
                 platform: Optional[Platform] = None,
                 networking_mode: Optional[NetworkingMode] = None,
                 wsl_bridge: Optional[WSLBridge] = None):
        self._platform = platform
        self._networking_mode = networking_mode
        self.wsl_bridge = wsl_bridge or WSLBridge()
        # Concurrent finders share a single detection. asyncio locks belong to
        # one event loop, and the default probe outlives each asyncio.run().
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    def _loop_lock(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def get_platform(self) -> Platform:
        if self._platform is None:
            async with self._loop_lock():
                if self._platform is None:
                    self._platform = await self._detect_platform()
                    logger.debug(f"Detected platform: {self._platform.value}")
        return self._platform

    async def get_networking_mode(self) -> NetworkingMode:
        """Networking mode of WSL2. Always UNKNOWN on other platforms."""
        if self._networking_mode is None:
            current = await self.get_platform()
            async with self._loop_lock():
                if self._networking_mode is None:
                    if current is Platform.WSL2:
                        self._networking_mode = await self.wsl_bridge.get_networking_mode()
                    else:
                        self._networking_mode = NetworkingMode.UNKNOWN
                    logger.debug(f"WSL2 networking mode: {self._networking_mode.value}")
        return self._networking_mode

    async def _detect_platform(self) -> Platform:
        system = _system_platform()
        if system == "darwin":
            return Platform.DARWIN
        if system == "win32":
            return Platform.WIN32

        proc_version = await asyncio.to_thread(_read_proc_version)
        generation = detect_wsl_generation(platform.release(), proc_version)
        if generation == 1:
            return Platform.WSL1
        if generation == 2:
            return Platform.WSL2
        return Platform.LINUX


@functools.lru_cache(maxsize=None)
def get_default_platform_probe() -> PlatformProbe:
    return PlatformProbe()


def _check_executable(path: str) -> bool:
    if not os.path.isfile(path):
        return False
    if os.access(path, os.X_OK):
        return True
    return sys.platform == "win32" and path.lower().endswith(WINDOWS_EXECUTABLE_SUFFIXES)


async def is_executable(path: str) -> bool:
    """True if path is an existing file that can be executed."""
    return await asyncio.to_thread(_check_executable, path)


async def find_executable(paths: Iterable[str],
                          is_executable: ExecutableCheck = is_executable) -> Optional[str]:
    """
    Returns the first executable among paths, in the given order.
    Remaining paths are not checked once a match is found.
    """
    for path in paths:
        if not path:
            continue
        if await is_executable(path):
            return path
    return None


def _bundle_executable_name(app_path: str) -> str:
    info_plist = os.path.join(app_path, "Contents", "Info.plist")
    try:
        with open(info_plist, "rb") as f:
            executable = plistlib.load(f).get("CFBundleExecutable")
        if executable:
            return executable
    except (OSError, plistlib.InvalidFileException) as e:
        logger.debug(f"Could not read {info_plist}: {e}")
    return os.path.splitext(os.path.basename(os.path.normpath(app_path)))[0]


async def normalize_darwin_app_path(path: str, platform_probe: PlatformProbe) -> str:
    """
    On macOS, resolves an application bundle such as /Applications/Firefox.app
    to the executable inside it. Other paths are returned unchanged.
    """
    if await platform_probe.get_platform() is not Platform.DARWIN:
        return path

    trimmed = path.rstrip("/")
    if not trimmed.endswith(".app") or not await asyncio.to_thread(os.path.isdir, trimmed):
        return path

    executable = await asyncio.to_thread(_bundle_executable_name, trimmed)
    return os.path.join(trimmed, "Contents", "MacOS", executable)
