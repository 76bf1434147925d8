"""In-memory fakes shared by the browser discovery tests."""

from __future__ import annotations

import asyncio
from typing import Any, cast

from browser_utils import Platform, PlatformProbe
from wsl_utils import BridgeUnavailableError, NetworkingMode


class FakeExecutables:
    """Executable check that only accepts a fixed set of paths and records every check."""

    def __init__(self, *paths: str) -> None:
        self.paths = set(paths)
        self.checked: list[str] = []

    async def __call__(self, path: str) -> bool:
        self.checked.append(path)
        return path in self.paths


class FakeWSLBridge:
    """In-memory stand-in for the Windows interop helpers.

    With a ``delay``, every helper sleeps before answering, like a real
    subprocess would, so concurrent callers actually interleave.
    """

    def __init__(
        self,
        windows_env: dict[str, str] | None = None,
        translations: dict[str, str] | None = None,
        networking_mode: NetworkingMode = NetworkingMode.UNKNOWN,
        unavailable: bool = False,
        delay: float = 0.0,
    ) -> None:
        self.windows_env = windows_env or {}
        self.translations = translations or {}
        self.networking_mode = networking_mode
        self.unavailable = unavailable
        self.delay = delay
        self.calls: list[tuple[str, str]] = []

    async def _answer(self, call: str, argument: str = "") -> None:
        self.calls.append((call, argument))
        if self.delay:
            await asyncio.sleep(self.delay)

    async def get_windows_env(self, name: str) -> str | None:
        await self._answer("get_windows_env", name)
        if self.unavailable:
            raise BridgeUnavailableError("cmd.exe is not reachable")
        return self.windows_env.get(name)

    async def translate_windows_path(self, windows_path: str) -> str:
        await self._answer("translate_windows_path", windows_path)
        if self.unavailable or windows_path not in self.translations:
            raise BridgeUnavailableError("wslpath failed")
        return self.translations[windows_path]

    async def get_networking_mode(self) -> NetworkingMode:
        await self._answer("get_networking_mode")
        return self.networking_mode


def make_probe(
    platform: Platform,
    bridge: FakeWSLBridge | None = None,
) -> PlatformProbe:
    """Build a probe pinned to one platform, asking the bridge for the networking mode."""

    return PlatformProbe(platform=platform, wsl_bridge=cast(Any, bridge or FakeWSLBridge()))
