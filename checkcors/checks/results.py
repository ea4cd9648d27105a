from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class HeaderMismatch:
    header: str
    expected: str
    got: str


@dataclass
class CheckResult:
    url: str
    headers_ok: bool
    error: str | None = None
    mismatches: list[HeaderMismatch] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.headers_ok and self.error is None
