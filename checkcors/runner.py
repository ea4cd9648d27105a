from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import requests

from checkcors.checks.cors_check import Checker, build_session
from checkcors.checks.results import CheckResult
from checkcors.config import settings
from checkcors.models import RequestHeadersError, load_request_headers
from checkcors.url_source import URLSource

logger = logging.getLogger(__name__)


class RunError(RuntimeError):
    pass


class RunStats:
    """Thread-safe tally of finished checks. ``failed`` never reverts once set."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.checked = 0
        self.failures = 0

    def record(self, result: CheckResult) -> None:
        with self._lock:
            self.checked += 1
            if not result.ok:
                self.failures += 1

    @property
    def failed(self) -> bool:
        with self._lock:
            return self.failures > 0


def _check_one(
    checker: Checker, url: str, stats: RunStats, cancel: threading.Event | None
) -> None:
    try:
        res = checker.check(url, cancel=cancel)
    except Exception as e:
        # Every dispatched URL must be counted, even if the check itself broke.
        res = CheckResult(url=url, headers_ok=False, error=f"check: {e}")
    if res.error is not None:
        logger.error("check URL", extra={"url": url, "err": res.error})
    stats.record(res)


def _dispatch_unbounded(
    checker: Checker, source: URLSource, stats: RunStats, cancel: threading.Event | None
) -> None:
    threads: list[threading.Thread] = []
    for url in source:
        t = threading.Thread(
            target=_check_one,
            args=(checker, url, stats, cancel),
            name=f"check-{len(threads)}",
        )
        t.start()
        threads.append(t)
    for t in threads:
        t.join()


def _dispatch_pooled(
    checker: Checker,
    source: URLSource,
    stats: RunStats,
    cancel: threading.Event | None,
    max_workers: int,
) -> None:
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="check") as pool:
        futures = [
            pool.submit(_check_one, checker, url, stats, cancel) for url in source
        ]
    for fut in futures:
        fut.result()


def run(
    urls_path: str | Path,
    reqheaders_path: str | Path | None = None,
    *,
    session: requests.Session | None = None,
    cancel: threading.Event | None = None,
    max_workers: int | None = None,
    timeout_s: float | None = None,
) -> RunStats:
    request_headers = None
    if reqheaders_path:
        try:
            request_headers = load_request_headers(reqheaders_path).to_headers()
        except RequestHeadersError as exc:
            raise RunError(f"load request headers: {exc}") from exc

    checker = Checker(
        session if session is not None else build_session(),
        request_headers=request_headers,
        timeout_s=timeout_s,
    )
    workers = settings.MAX_WORKERS if max_workers is None else max_workers

    source = URLSource(urls_path)
    stats = RunStats()
    if workers > 0:
        _dispatch_pooled(checker, source, stats, cancel, workers)
    else:
        _dispatch_unbounded(checker, source, stats, cancel)

    if source.error is not None:
        raise RunError(f"load URLs: {source.error}") from source.error
    if stats.failed:
        raise RunError("unsuccessful")

    logger.info("run complete", extra={"checked": stats.checked, "failed": stats.failures})
    return stats
