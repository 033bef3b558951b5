######## models.py
########

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

DEFAULT_MIN_SCORE = 8.0


class Bucket(Enum):
    ALL = "all"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class Asset:
    content_type: str
    code: int
    content_length: int
    error: str = ""


@dataclass(frozen=True)
class RequestInfo:
    ip: str = ""


@dataclass(frozen=True)
class ResultItem:
    url: str
    error_string: str
    score: float
    request: Optional[RequestInfo] = None
    response: Optional[Mapping[str, Any]] = None    # read-only view, None when nothing came back
    assets: Optional[Tuple[Asset, ...]] = None

    @property
    def status_code(self) -> Optional[int]:
        if self.response is None:
            return None
        code = self.response.get("Code", self.response.get("code"))
        return code if isinstance(code, int) else None


@dataclass(frozen=True)
class Report:
    success: bool
    min_score: float = DEFAULT_MIN_SCORE
    items: Tuple[ResultItem, ...] = ()

    # producer metadata, optional
    version: str = ""
    successful: int = 0
    failed: int = 0
    host_file: str = ""
    time_scanned: str = ""
    raw_json: str = field(default="", repr=False)


@dataclass(frozen=True)
class AssetStats:
    labels: Tuple[str, ...] = ()
    data: Tuple[int, ...] = ()

    def as_dict(self) -> dict:
        return {"labels": list(self.labels), "data": list(self.data)}


EMPTY_STATS = AssetStats()


@dataclass(frozen=True)
class RouteSpec:
    name: str
    path: str
    title: str
    bucket: Optional[Bucket]        # None: the view lists no results ("none" selector)
