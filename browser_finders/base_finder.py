import logging
import os
import posixpath
from abc import ABC
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

import browser_utils
from browser_utils import ExecutableCheck, Platform, PlatformProbe
from config import AppSettings, settings as default_settings
from wsl_utils import BridgeUnavailableError, NetworkingMode


class AutomationProtocol(str, Enum):
    CHROME = "chrome"
    CHROME_CDP = "chrome-cdp"
    FIREFOX = "firefox"


class BrowserFinderOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    preferred_path: Optional[str] = None


class BrowserFinderResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    accepted_protocols: FrozenSet[AutomationProtocol]


class BrowserNotFoundError(RuntimeError):
    """Raised by a finder when its browser family is not installed."""

    def __init__(self, family: str):
        super().__init__(f"{family} browser could not be found.")
        self.family = family


class BaseBrowserFinder(ABC):
    """
    Locates one browser family. Subclasses declare their install locations,
    listed from the most preferred channel to stable:

    - darwin_bundles: (bundle name, executable name) pairs under Applications
    - linux_paths: absolute executable paths
    - win32_suffixes: path parts appended to each Windows install prefix
    """
    name: str = ""
    display_name: str = ""
    accepted_protocols: FrozenSet[AutomationProtocol] = frozenset()

    darwin_bundles: Sequence[Tuple[str, str]] = ()
    linux_paths: Sequence[str] = ()
    win32_suffixes: Sequence[Sequence[str]] = ()

    def __init__(self,
                 platform_probe: PlatformProbe,
                 is_executable: Optional[ExecutableCheck] = None,
                 app_settings: Optional[AppSettings] = None):
        self.platform_probe = platform_probe
        self.is_executable = is_executable or browser_utils.is_executable
        self.settings = app_settings or default_settings
        self.logger = logging.getLogger(f"BrowserFinder.{self.display_name or 'Base'}")

    def result(self, path: str) -> BrowserFinderResult:
        return BrowserFinderResult(path=path, accepted_protocols=self.accepted_protocols)

    async def find(self, options: BrowserFinderOptions) -> BrowserFinderResult:
        # Any preferred path is accepted as-is for this family
        if options.preferred_path:
            return self.result(options.preferred_path)

        platform = await self.platform_probe.get_platform()
        installation = await self._find_installation(platform)

        if installation:
            self.logger.debug(f"Found {self.display_name} at {installation}")
            return self.result(installation)

        raise BrowserNotFoundError(self.display_name)

    async def _find_installation(self, platform: Platform) -> Optional[str]:
        if platform is Platform.DARWIN:
            return await self._find_first(self.darwin_candidates())
        if platform is Platform.LINUX:
            return await self._find_first(self.linux_candidates())
        if platform is Platform.WIN32:
            return await self._find_first(self.win32_candidates(
                program_files=os.environ.get("PROGRAMFILES"),
                program_files_x86=os.environ.get("PROGRAMFILES(X86)"),
                local_app_data=os.environ.get("LOCALAPPDATA"),
            ))
        if platform is Platform.WSL1:
            return await self._find_wsl()
        if platform is Platform.WSL2:
            installation = await self._find_first(self.linux_candidates())
            if installation:
                return installation

            mode = await self.platform_probe.get_networking_mode()
            if mode is NetworkingMode.MIRRORED:
                return await self._find_wsl()

            self.logger.debug(f"Skipping Windows host fallback in WSL2 {mode.value} networking mode.")
        return None

    async def _find_first(self, candidates: List[str]) -> Optional[str]:
        if self.settings.debug_logging:
            self.logger.debug(f"Checking {self.display_name} candidates: {candidates}")
        return await browser_utils.find_executable(candidates, is_executable=self.is_executable)

    async def _find_wsl(self) -> Optional[str]:
        """Looks for the browser installed on the Windows host."""
        local_app_data = await self._wsl_local_app_data()

        return await self._find_first(self.win32_candidates(
            program_files=self.settings.wsl_program_files,
            program_files_x86=self.settings.wsl_program_files_x86,
            local_app_data=local_app_data,
            join=posixpath.join,
        ))

    async def _wsl_local_app_data(self) -> Optional[str]:
        bridge = self.platform_probe.wsl_bridge
        try:
            windows_path = await bridge.get_windows_env("LOCALAPPDATA")
            if not windows_path:
                return None
            return await bridge.translate_windows_path(windows_path)
        except BridgeUnavailableError as e:
            self.logger.debug(f"Windows LOCALAPPDATA is unavailable, skipping per-user installs: {e}")
            return None

    def darwin_candidates(self, home: Optional[str] = None) -> List[str]:
        home = home or os.path.expanduser("~")
        paths: List[str] = []

        for bundle, executable in self.darwin_bundles:
            for applications in (os.path.join(home, "Applications"), "/Applications"):
                paths.append(os.path.join(applications, f"{bundle}.app", "Contents", "MacOS", executable))

        return paths

    def linux_candidates(self) -> List[str]:
        return list(self.linux_paths)

    def win32_candidates(self,
                         program_files: Optional[str] = None,
                         program_files_x86: Optional[str] = None,
                         local_app_data: Optional[str] = None,
                         join: Callable[..., str] = os.path.join) -> List[str]:
        paths: List[str] = []

        for suffix in self.win32_suffixes:
            for prefix in (local_app_data, program_files, program_files_x86):
                if prefix:
                    paths.append(join(prefix, *suffix))

        return paths
