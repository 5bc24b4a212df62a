"""Command-line entry point: ``wheatscan capture`` or ``wheatscan pick [PATH]``."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from wheatscan.config import Settings, get_settings
from wheatscan.handlers.session import DiagnosisSession
from wheatscan.services.connectivity import SocketNetworkMonitor
from wheatscan.services.inference import InferenceClient
from wheatscan.services.platform import get_platform
from wheatscan.services.platform.console import ConsoleScreen

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wheatscan", description="Diagnose wheat plant diseases from a photo")
    parser.add_argument("--base-url", help="Override the classification service base URL")
    parser.add_argument("--yes", "-y", action="store_true", help="Accept the preview without asking")
    parser.add_argument("--show", action="store_true", help="Open the preview in an image viewer")
    parser.add_argument("--search", action="store_true", help="Search the web for the diagnosis afterwards")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="source", required=True)
    sub.add_parser("capture", help="Take a photo with the configured camera program")
    pick = sub.add_parser("pick", help="Choose a photo from disk")
    pick.add_argument("path", nargs="?", help="Image path or URI; opens the picker program when omitted")
    return parser


async def diagnose(args: argparse.Namespace, settings: Settings) -> int:
    platform = get_platform(settings, selection=getattr(args, "path", None))
    screen = ConsoleScreen(auto_confirm=args.yes, show_previews=args.show)
    monitor = SocketNetworkMonitor.from_settings(settings)

    async with InferenceClient.from_settings(settings) as client:
        session = DiagnosisSession.build(
            settings, platform=platform, screen=screen, client=client, monitor=monitor
        )
        source = "camera" if args.source == "capture" else "library"
        view = await session.run(source)

    if view is None:
        return 1
    if args.search and view.search_available:
        session.presenter.open_search(view)
    return 0 if not view.is_error else 1


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    if args.base_url:
        settings = settings.model_copy(update={"api_base_url": args.base_url})

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Using endpoint %s", settings.predict_url)
    return asyncio.run(diagnose(args, settings))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
