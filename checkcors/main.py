from __future__ import annotations

import argparse
import logging
import signal
import threading
from collections.abc import Sequence

from checkcors.config import settings
from checkcors.logfmt import setup_logging
from checkcors.runner import RunError, run

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="checkcors",
        description="Check that HTTP endpoints advertise permissive CORS headers.",
    )
    parser.add_argument(
        "-urls",
        "--urls",
        dest="urls",
        required=True,
        metavar="PATH",
        help="path to file with list of URLs to check",
    )
    parser.add_argument(
        "-reqheaders",
        "--reqheaders",
        dest="reqheaders",
        default="",
        metavar="PATH",
        help="path to JSON file with request headers",
    )
    parser.add_argument(
        "-workers",
        "--workers",
        dest="workers",
        type=int,
        default=settings.MAX_WORKERS,
        metavar="N",
        help="check at most N URLs at once (0 = one thread per URL)",
    )
    return parser


def install_interrupt_handler(cancel: threading.Event):
    def _handler(signum, frame) -> None:
        logger.warning("interrupted, cancelling checks")
        cancel.set()

    return signal.signal(signal.SIGINT, _handler)


def main(argv: Sequence[str] | None = None) -> int:
    # argparse exits with status 2 and prints usage on a missing -urls.
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.urls.strip():
        parser.error("-urls must not be empty")
    setup_logging(settings.LOG_LEVEL)

    cancel = threading.Event()
    previous = None
    if threading.current_thread() is threading.main_thread():
        previous = install_interrupt_handler(cancel)

    try:
        run(
            args.urls,
            args.reqheaders or None,
            cancel=cancel,
            max_workers=args.workers,
        )
    except RunError as exc:
        logger.error("failed", extra={"err": str(exc)})
        return 1
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)
    return 0
