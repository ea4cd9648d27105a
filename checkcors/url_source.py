from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path


class ReadError(RuntimeError):
    pass


class URLSource:
    """
    Single-pass sequence of target URLs read from a text file.

    Read failures end the sequence instead of raising; drain it, then
    check ``error``.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.error: ReadError | None = None
        self._consumed = False

    def __iter__(self) -> Iterator[str]:
        if self._consumed:
            raise RuntimeError(f"URL source {self.path} was already consumed")
        self._consumed = True
        return self._lines()

    def _lines(self) -> Iterator[str]:
        try:
            fh = self.path.open(encoding="utf-8")
        except OSError as exc:
            self.error = ReadError(f"open {self.path}: {exc}")
            return

        with fh:
            try:
                for line in fh:
                    url = line.strip()
                    if not url or url.startswith("#"):
                        continue
                    yield url
            except (OSError, UnicodeDecodeError) as exc:
                self.error = ReadError(f"read {self.path}: {exc}")
