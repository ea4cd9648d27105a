from __future__ import annotations

import logging
import threading
import time
from collections.abc import Mapping

import requests
from requests.structures import CaseInsensitiveDict

from checkcors.checks.results import CheckResult, HeaderMismatch
from checkcors.config import settings

logger = logging.getLogger(__name__)

EXPECTED_HEADERS: Mapping[str, str] = {
    "Access-Control-Allow-Methods": "GET",
    "Access-Control-Allow-Origin": "*",
}

# Reads block until a full chunk arrives, so small chunks keep the deadline tight.
DRAIN_CHUNK_SIZE = 1
CANCELED = "context canceled"


def build_session() -> requests.Session:
    return requests.Session()


def check_headers(
    url: str, headers: Mapping[str, str], expected: Mapping[str, str]
) -> list[HeaderMismatch]:
    """
    Compare response headers against the expected values.
    Names are looked up case-insensitively; values must match exactly.
    """
    mismatches: list[HeaderMismatch] = []
    for name, value in expected.items():
        actual = headers.get(name, "")
        if actual != value:
            logger.error(
                "header mismatch",
                extra={"url": url, "header": name, "expected": value, "got": actual},
            )
            mismatches.append(HeaderMismatch(header=name, expected=value, got=actual))
    return mismatches


class Checker:
    def __init__(
        self,
        session: requests.Session,
        request_headers: Mapping[str, str] | None = None,
        timeout_s: float | None = None,
        expected: Mapping[str, str] = EXPECTED_HEADERS,
    ) -> None:
        self.session = session
        self.request_headers = (
            CaseInsensitiveDict(request_headers) if request_headers is not None else None
        )
        self.timeout_s = settings.TIMEOUT_SECONDS if timeout_s is None else timeout_s
        self.expected = dict(expected)

    def _prepare(self, url: str) -> requests.PreparedRequest:
        prepped = self.session.prepare_request(requests.Request("GET", url))
        if self.request_headers is not None:
            # Configured headers replace the session defaults outright.
            prepped.headers = CaseInsensitiveDict(self.request_headers)
        return prepped

    def check(self, url: str, cancel: threading.Event | None = None) -> CheckResult:
        if cancel is not None and cancel.is_set():
            return CheckResult(url=url, headers_ok=False, error=CANCELED)

        try:
            prepped = self._prepare(url)
        except Exception as e:
            return CheckResult(url=url, headers_ok=False, error=f"create request: {e}")

        # The timeout bounds the whole exchange, body included.
        deadline = time.monotonic() + self.timeout_s
        try:
            send_kwargs = self.session.merge_environment_settings(
                prepped.url, {}, True, None, None
            )
            resp = self.session.send(prepped, timeout=self.timeout_s, **send_kwargs)
        except Exception as e:
            return CheckResult(url=url, headers_ok=False, error=f"perform request: {e}")

        with resp:
            try:
                for _ in resp.iter_content(chunk_size=DRAIN_CHUNK_SIZE):
                    if cancel is not None and cancel.is_set():
                        return CheckResult(url=url, headers_ok=False, error=CANCELED)
                    if time.monotonic() > deadline:
                        return CheckResult(
                            url=url,
                            headers_ok=False,
                            error=f"read body: timeout after {self.timeout_s}s",
                        )
            except Exception as e:
                return CheckResult(url=url, headers_ok=False, error=f"read body: {e}")

            mismatches = check_headers(url, resp.headers, self.expected)

        return CheckResult(url=url, headers_ok=not mismatches, mismatches=mismatches)
