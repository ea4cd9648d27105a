from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Union

from pydantic import RootModel, ValidationError
from requests.structures import CaseInsensitiveDict

HeaderValue = Union[str, List[str]]


class RequestHeadersError(RuntimeError):
    pass


class RequestHeaders(RootModel[Dict[str, HeaderValue]]):
    def to_headers(self) -> CaseInsensitiveDict:
        """
        Flatten into the mapping sent on the wire.
        Multi-valued entries are joined with ", ".
        """
        out: CaseInsensitiveDict = CaseInsensitiveDict()
        for name, value in self.root.items():
            out[name] = value if isinstance(value, str) else ", ".join(value)
        return out


def load_request_headers(path: str | Path) -> RequestHeaders:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RequestHeadersError(f"read {path}: {exc}") from exc
    except ValueError as exc:
        raise RequestHeadersError(f"invalid JSON in {path}: {exc}") from exc

    try:
        return RequestHeaders.model_validate(data)
    except ValidationError as exc:
        raise RequestHeadersError(
            f"{path} must be a JSON object of header name to string or list of strings: {exc}"
        ) from exc
