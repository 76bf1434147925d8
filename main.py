import argparse
import asyncio
import json
import logging
import sys
from typing import Optional, Sequence

import colorlog

from browser_finder import NoSuitableBrowserError, find_browser
from browser_finders import available_finders
from config import settings

# --- Logger Setup ---
logger = logging.getLogger("BrowserFinder.CLI")

def setup_logging(debug_mode: bool = False):
    """Configures colored logging."""
    root_logger = logging.getLogger()
    log_level = logging.DEBUG if debug_mode else logging.INFO
    root_logger.setLevel(log_level)

    handler = colorlog.StreamHandler(sys.stderr)
    formatter = colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s - %(name)s - [%(levelname)s] - %(message)s%(reset)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        },
        style='%'
    )
    handler.setFormatter(formatter)
    handler.setLevel(log_level)

    # Avoid duplicate messages when called more than once
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.getLogger("BrowserFinder").setLevel(log_level)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find a browser executable usable for automation.")
    parser.add_argument(
        "--finder",
        dest="finders",
        action="append",
        choices=available_finders(),
        help=f"Browser finder to try, in priority order. Repeatable (default: {', '.join(settings.default_finders)}).",
    )
    parser.add_argument(
        "--preferred-path",
        type=str,
        default=None,
        help="Browser executable (or macOS .app bundle) to use when it is executable.",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    parser.add_argument(
        "--debug-logging",
        action="store_true",
        help="Enable debug level logging of the discovery process."
    )
    return parser

async def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(args.debug_logging)
    settings.debug_logging = args.debug_logging
    logger.debug(f"Debug logging enabled: {settings.debug_logging}")

    try:
        result = await find_browser(args.finders, args.preferred_path)
    except NoSuitableBrowserError as e:
        logger.error(str(e))
        return 1

    protocols = sorted(protocol.value for protocol in result.accepted_protocols)
    if args.json:
        print(json.dumps({"path": result.path, "accepted_protocols": protocols}))
    else:
        print(result.path)
        logger.info(f"Accepted protocols: {', '.join(protocols)}")
    return 0

def run():
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        sys.exit(130)

if __name__ == "__main__":
    run()
