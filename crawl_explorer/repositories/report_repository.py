from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from crawl_explorer.domain.models import (
    DEFAULT_MIN_SCORE,
    Asset,
    Report,
    RequestInfo,
    ResultItem,
)

log = logging.getLogger(__name__)

EMPTY_REPORT = Report(success=False)


def _pick(d: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key wins; the producer writes PascalCase, hand-made reports camelCase."""
    for k in keys:
        if k in d:
            return d[k]
    return default


def _as_str(v: Any) -> str:
    return v if isinstance(v, str) else ("" if v is None else str(v))


def _as_number(v: Any, fallback: float = 0.0) -> float:
    if isinstance(v, bool):
        return fallback
    if isinstance(v, (int, float)):
        return float(v)
    return fallback


def _parse_asset(raw: Mapping[str, Any]) -> Asset:
    # assets are either flat or nested like the result itself (Response.ContentType)
    resp = _pick(raw, "Response", "response", default=None) or {}
    merged = {**resp, **raw}
    return Asset(
        content_type=_as_str(_pick(merged, "contentType", "ContentType", default="")),
        code=int(_as_number(_pick(merged, "code", "Code"))),
        content_length=int(_as_number(_pick(merged, "contentLength", "ContentLength"))),
        error=_as_str(_pick(merged, "error", "Error", default="")),
    )


def _parse_item(raw: Mapping[str, Any]) -> ResultItem:
    if not isinstance(raw, Mapping):
        raise TypeError(f"result item must be an object, got {type(raw).__name__}")

    # the producer nests the fetch result under Result (older builds: Domain)
    inner = _pick(raw, "Result", "Domain", default=None) or raw
    if not isinstance(inner, Mapping):
        raise TypeError("Result must be an object")

    request_raw = _pick(inner, "request", "Request")
    request = None
    if isinstance(request_raw, Mapping):
        request = RequestInfo(ip=_as_str(_pick(request_raw, "ip", "IP", default="")))

    response_raw = _pick(inner, "response", "Response")
    response = MappingProxyType(dict(response_raw)) if isinstance(response_raw, Mapping) else None

    assets_raw = _pick(inner, "assets", "Assets")
    assets: Optional[Tuple[Asset, ...]] = None
    if isinstance(assets_raw, list):
        assets = tuple(_parse_asset(a) for a in assets_raw if isinstance(a, Mapping))

    return ResultItem(
        url=_as_str(_pick(inner, "url", "URL", default="")),
        error_string=_as_str(_pick(raw, "errorString", "ErrorString", default="")),
        score=_as_number(_pick(raw, "score", "Score")),
        request=request,
        response=response,
        assets=assets,
    )


def parse_report(doc: Any) -> Report:
    if not isinstance(doc, Mapping):
        log.warning("Report document is not a JSON object (%s); using an empty report", type(doc).__name__)
        return EMPTY_REPORT

    success = bool(_pick(doc, "success", "Success", default=False))
    items_raw = _pick(doc, "items", "Out", default=None) or []
    if not isinstance(items_raw, list):
        log.warning("Report items are not a list; ignoring them")
        items_raw = []
        success = False

    items = []
    for i, raw in enumerate(items_raw):
        try:
            items.append(_parse_item(raw))
        except (TypeError, ValueError, KeyError) as e:
            log.warning("Skipping unreadable result item #%d: %s", i, e)
            success = False

    return Report(
        success=success,
        min_score=_as_number(_pick(doc, "minScore", "MinScore"), DEFAULT_MIN_SCORE),
        items=tuple(items),
        version=_as_str(_pick(doc, "version", "Version", default="")),
        successful=int(_as_number(_pick(doc, "successful", "Successful"))),
        failed=int(_as_number(_pick(doc, "failed", "Failed"))),
        host_file=_as_str(_pick(doc, "hostFile", "HostFile", default="")),
        time_scanned=_as_str(_pick(doc, "timeScanned", "TimeScanned", default="")),
        raw_json=json.dumps(doc, indent=4),
    )


@dataclass(frozen=True)
class ReportStore:
    """
    Holds the single report of the session. Built once at startup and never
    mutated; everything downstream receives the Report by reference.
    """
    report: Report

    @classmethod
    def from_json(cls, text: str) -> "ReportStore":
        try:
            doc = json.loads(text)
        except (TypeError, ValueError, RecursionError) as e:
            log.warning("Error parsing embedded report JSON: %s", e)
            return cls(EMPTY_REPORT)
        return cls(parse_report(doc))

    @classmethod
    def load(cls, path: Path) -> "ReportStore":
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except (OSError, ValueError) as e:
            log.warning("Report file unreadable: %s (%s)", path, e)
            return cls(EMPTY_REPORT)
        store = cls.from_json(text)
        log.info("Loaded %d result item(s) from %s (success=%s)", len(store.items), path, store.success)
        return store

    @property
    def items(self) -> Tuple[ResultItem, ...]:
        return self.report.items

    @property
    def min_score(self) -> float:
        return self.report.min_score

    @property
    def success(self) -> bool:
        return self.report.success
