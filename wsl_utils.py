"""
Helpers for reaching the Windows host from inside WSL.
"""
import asyncio
import logging
from typing import Optional
from enum import Enum

from config import AppSettings, settings

logger = logging.getLogger("BrowserFinder.WSL")


class BridgeUnavailableError(RuntimeError):
    """Raised when a Windows interop helper cannot be used."""


class NetworkingMode(str, Enum):
    MIRRORED = "mirrored"
    NAT = "nat"
    UNKNOWN = "unknown"


class WSLBridge:
    def __init__(self, app_settings: Optional[AppSettings] = None):
        self.helper_timeout = (app_settings or settings).wsl_helper_timeout

    async def _run_helper(self, *args: str) -> str:
        logger.debug(f"Running WSL helper: {args}")
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise BridgeUnavailableError(f"Could not start {args[0]}: {e}") from e

        try:
            if self.helper_timeout is None:
                stdout, _ = await process.communicate()
            else:
                stdout, _ = await asyncio.wait_for(process.communicate(), timeout=self.helper_timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise BridgeUnavailableError(f"{args[0]} did not answer within {self.helper_timeout}s") from e

        if process.returncode != 0:
            raise BridgeUnavailableError(f"{args[0]} exited with code {process.returncode}")

        # wslinfo and some cmd.exe builds write UTF-16 with NUL padding
        output = stdout.decode("utf-8", errors="ignore").replace("\x00", "").strip()
        if not output:
            raise BridgeUnavailableError(f"{args[0]} returned no output")
        return output

    async def get_windows_env(self, name: str) -> Optional[str]:
        """
        Reads an environment variable of the Windows host.
        Returns None if the variable is not set on the host.
        """
        placeholder = f"%{name}%"
        value = await self._run_helper("cmd.exe", "/d", "/s", "/c", f"echo {placeholder}")
        # Only the last line is the echo; cmd.exe may print a UNC warning first
        value = value.splitlines()[-1].strip()
        if not value or value == placeholder:
            return None
        return value

    async def translate_windows_path(self, windows_path: str) -> str:
        """Converts a path like C:\\Users\\me into its /mnt/c/Users/me form."""
        return await self._run_helper("wslpath", "-u", windows_path)

    async def get_networking_mode(self) -> NetworkingMode:
        try:
            raw_mode = await self._run_helper("wslinfo", "--networking-mode")
        except BridgeUnavailableError as e:
            logger.debug(f"Could not determine WSL2 networking mode: {e}")
            return NetworkingMode.UNKNOWN

        try:
            return NetworkingMode(raw_mode.lower())
        except ValueError:
            logger.debug(f"Unrecognized WSL2 networking mode: {raw_mode}")
            return NetworkingMode.UNKNOWN
