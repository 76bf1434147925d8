"""
Concurrent, priority-ordered browser discovery.

All requested finders run at the same time, but the result always comes from
the earliest finder in the requested order that succeeds. A finder that
answers quickly can only win once every finder ahead of it has failed.
"""
import asyncio
import functools
import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence, Set

from browser_finders import (
    BaseBrowserFinder,
    BrowserFinderFactory,
    BrowserFinderOptions,
    BrowserFinderResult,
    ChromeFinder,
)
from browser_utils import (
    ExecutableCheck,
    PlatformProbe,
    get_default_platform_probe,
    is_executable as default_is_executable,
    normalize_darwin_app_path,
)
from config import AppSettings, settings
from wsl_utils import WSLBridge

logger = logging.getLogger("BrowserFinder")

FinderFactory = Callable[[str], BaseBrowserFinder]

# Finders that lost the race keep running; hold them until they finish
_background_tasks: Set["asyncio.Task[BrowserFinderResult]"] = set()


class NoSuitableBrowserError(RuntimeError):
    """Raised when none of the requested finders located a browser."""

    def __init__(self, finders: Sequence[str]):
        self.finders = list(finders)
        if self.finders:
            message = (
                "No suitable browser found. Please ensure one of the following browsers is installed: "
                f"{', '.join(self.finders)}"
            )
        else:
            message = "No suitable browser found."
        super().__init__(message)


class SlotState(Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ResolutionSlot:
    """Outcome of one finder. Leaves PENDING exactly once."""

    def __init__(self):
        self.state = SlotState.PENDING
        self.result: Optional[BrowserFinderResult] = None

    def succeed(self, result: BrowserFinderResult) -> None:
        self._leave_pending(SlotState.SUCCEEDED)
        self.result = result

    def fail(self) -> None:
        self._leave_pending(SlotState.FAILED)

    def _leave_pending(self, state: SlotState) -> None:
        if self.state is not SlotState.PENDING:
            raise RuntimeError(f"Resolution slot already {self.state.value}")
        self.state = state


def select_frontier(slots: Sequence[ResolutionSlot]) -> Optional[int]:
    """Index of the highest priority slot that has not failed, or None."""
    frontier = None
    for index in range(len(slots) - 1, -1, -1):
        if slots[index].state is not SlotState.FAILED:
            frontier = index
    return frontier


async def normalize_preferred_path(preferred_path: Optional[str],
                                   platform_probe: PlatformProbe,
                                   is_executable: ExecutableCheck = default_is_executable) -> Optional[str]:
    """
    Returns the executable a preferred path points at, or None when it
    cannot be used. An unusable path is dropped rather than reported.
    """
    if not preferred_path:
        return None

    normalized = await normalize_darwin_app_path(preferred_path, platform_probe)
    if await is_executable(normalized):
        return normalized

    logger.debug(f"Ignoring preferred path, not an executable: {normalized}")
    return None


class BrowserFinder:
    def __init__(self,
                 platform_probe: Optional[PlatformProbe] = None,
                 is_executable: Optional[ExecutableCheck] = None,
                 finder_factory: Optional[FinderFactory] = None,
                 app_settings: Optional[AppSettings] = None):
        self.settings = app_settings or settings
        if platform_probe is None:
            # Injected settings need their own bridge; the shared probe uses the global ones
            platform_probe = (PlatformProbe(wsl_bridge=WSLBridge(app_settings)) if app_settings is not None
                              else get_default_platform_probe())
        self.platform_probe = platform_probe
        self.is_executable = is_executable or default_is_executable
        self.finder_factory = finder_factory or functools.partial(
            BrowserFinderFactory.create_finder,
            platform_probe=self.platform_probe,
            is_executable=self.is_executable,
            app_settings=self.settings,
        )

    async def find(self,
                   finders: Optional[Sequence[str]] = None,
                   preferred_path: Optional[str] = None) -> BrowserFinderResult:
        names = list(self.settings.default_finders if finders is None else finders)
        # Unknown names fail here, before anything starts running
        instances = [self.finder_factory(name) for name in names]

        options = BrowserFinderOptions(
            preferred_path=await normalize_preferred_path(preferred_path, self.platform_probe, self.is_executable),
        )

        if not instances:
            logger.debug("No browser finder specified.")
            if options.preferred_path:
                logger.debug(f"Use preferred path as Chrome: {options.preferred_path}")
                return await self.finder_factory(ChromeFinder.name).find(options)
            raise NoSuitableBrowserError([])

        logger.debug(f"Start finding browser from {', '.join(names)} ({options})")
        result = await self._race(names, instances, options)
        logger.debug(f"Use browser: {result}")
        return result

    async def _race(self,
                    names: List[str],
                    finders: List[BaseBrowserFinder],
                    options: BrowserFinderOptions) -> BrowserFinderResult:
        outcome: "asyncio.Future[BrowserFinderResult]" = asyncio.get_running_loop().create_future()
        slots = [ResolutionSlot() for _ in finders]

        def evaluate() -> None:
            if outcome.done():
                return

            frontier = select_frontier(slots)
            if frontier is None:
                outcome.set_exception(NoSuitableBrowserError(names))
            elif slots[frontier].state is SlotState.SUCCEEDED:
                outcome.set_result(slots[frontier].result)

        def on_finder_done(index: int, name: str, task: "asyncio.Task[BrowserFinderResult]") -> None:
            _background_tasks.discard(task)

            if task.cancelled():
                logger.debug(f"Finder {name} was cancelled.")
                slots[index].fail()
            elif task.exception() is not None:
                logger.debug(f"Finder {name} was failed: {task.exception()}")
                slots[index].fail()
            else:
                logger.debug(f"Found {name}: {task.result()}")
                slots[index].succeed(task.result())

            evaluate()

        for index, (name, finder) in enumerate(zip(names, finders)):
            task = asyncio.create_task(finder.find(options), name=f"browser-finder-{name}")
            _background_tasks.add(task)
            task.add_done_callback(functools.partial(on_finder_done, index, name))

        return await outcome


async def find_browser(finders: Optional[Sequence[str]] = None,
                       preferred_path: Optional[str] = None,
                       *,
                       platform_probe: Optional[PlatformProbe] = None,
                       is_executable: Optional[ExecutableCheck] = None,
                       app_settings: Optional[AppSettings] = None) -> BrowserFinderResult:
    """
    Finds a browser using the given finders in priority order
    (settings.default_finders when finders is None: chrome, edge, firefox).
    Raises NoSuitableBrowserError if none of them finds one.
    """
    browser_finder = BrowserFinder(platform_probe=platform_probe,
                                   is_executable=is_executable,
                                   app_settings=app_settings)
    return await browser_finder.find(finders, preferred_path)
