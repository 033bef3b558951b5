"""
View state of the results explorer and its bridge to the navigation address.

The state is an immutable value. Every user or navigation event goes through
reduce(), which returns the next state plus the side effects the presentation
layer has to carry out (rewrite the address, set the document title). Nothing
here touches the network or the filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode, urlsplit

from crawl_explorer.domain.models import (
    EMPTY_STATS,
    AssetStats,
    Bucket,
    Report,
    ResultItem,
    RouteSpec,
)
from crawl_explorer.services.asset_stats import aggregate
from crawl_explorer.services.classification import filter_items

QUERY_PARAM = "q"

ROUTES: Dict[str, RouteSpec] = {
    "home": RouteSpec("home", "/", "Test Results", Bucket.ALL),
    "success": RouteSpec("success", "/results/success", "Successful Results", Bucket.SUCCESS),
    "failed": RouteSpec("failed", "/results/failed", "Failed Results", Bucket.FAILED),
    "raw": RouteSpec("raw", "/raw/data", "Raw Crawl Results", None),
}
DEFAULT_ROUTE = ROUTES["home"]


def route_for_path(path: str) -> RouteSpec:
    path = (path or "/").rstrip("/") or "/"
    for spec in ROUTES.values():
        if spec.path == path:
            return spec
    return DEFAULT_ROUTE


# -----------------------------
# Navigation address
# -----------------------------
@dataclass(frozen=True)
class NavigationAddress:
    path: str = "/"
    # (key, value) pairs in insertion order; a mapping is accepted and converted
    params: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self):
        pairs = self.params.items() if isinstance(self.params, Mapping) else self.params
        object.__setattr__(self, "params", tuple((str(k), str(v)) for k, v in pairs))

    @classmethod
    def from_url(cls, url: str) -> "NavigationAddress":
        parts = urlsplit(url or "/")
        return cls(path=parts.path or "/", params=dict(parse_qsl(parts.query, keep_blank_values=True)))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return dict(self.params).get(key, default)

    def with_param(self, key: str, value: Optional[str]) -> "NavigationAddress":
        params = dict(self.params)
        if value:
            params[key] = value
        else:
            params.pop(key, None)
        return NavigationAddress(self.path, params)

    def to_url(self) -> str:
        return f"{self.path}?{urlencode(self.params)}" if self.params else self.path


# -----------------------------
# Events and commands
# -----------------------------
@dataclass(frozen=True)
class Navigated:
    address: NavigationAddress


@dataclass(frozen=True)
class QueryEdited:
    text: Optional[str]


@dataclass(frozen=True)
class ItemToggled:
    index: int


Event = Union[Navigated, QueryEdited, ItemToggled]


@dataclass(frozen=True)
class ReplaceAddress:
    address: NavigationAddress
    reload: bool = False    # address is a projection of the state: do not re-enter the route

    def as_dict(self) -> Dict[str, Any]:
        return {"type": "replace_address", "url": self.address.to_url(), "reload": self.reload}


@dataclass(frozen=True)
class SetTitle:
    title: str

    def as_dict(self) -> Dict[str, Any]:
        return {"type": "set_title", "title": self.title}


Command = Union[ReplaceAddress, SetTitle]


# -----------------------------
# State
# -----------------------------
@dataclass(frozen=True)
class ViewState:
    route: str = DEFAULT_ROUTE.name
    bucket: Optional[Bucket] = DEFAULT_ROUTE.bucket
    query: str = ""
    expanded_index: int = -1
    stats: AssetStats = EMPTY_STATS

    @property
    def route_spec(self) -> RouteSpec:
        return ROUTES.get(self.route, DEFAULT_ROUTE)

    @property
    def address(self) -> NavigationAddress:
        return NavigationAddress(self.route_spec.path).with_param(QUERY_PARAM, self.query)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "route": self.route,
            "bucket": self.bucket.value if self.bucket else "none",
            "query": self.query,
            "expanded_index": self.expanded_index,
            "stats": self.stats.as_dict(),
        }


def initial_state(address: NavigationAddress) -> ViewState:
    spec = route_for_path(address.path)
    return ViewState(
        route=spec.name,
        bucket=spec.bucket,
        query=address.get(QUERY_PARAM) or "",
    )


def visible_items(state: ViewState, report: Report) -> Tuple[ResultItem, ...]:
    if state.bucket is None:
        # views without a classification (raw data) list no results
        return ()
    return filter_items(report.items, state.bucket, report.min_score, state.query)


def expanded_item(state: ViewState, report: Report) -> Optional[ResultItem]:
    items = visible_items(state, report)
    if 0 <= state.expanded_index < len(items):
        return items[state.expanded_index]
    return None


def _collapsed(state: ViewState) -> ViewState:
    return replace(state, expanded_index=-1, stats=EMPTY_STATS)


def _expand(state: ViewState, index: int, report: Report) -> ViewState:
    items = visible_items(state, report)
    if not 0 <= index < len(items):
        return _collapsed(state)
    return replace(state, expanded_index=index, stats=aggregate(items[index]))


def reduce(state: ViewState, event: Event, report: Report) -> Tuple[ViewState, Tuple[Command, ...]]:
    if isinstance(event, QueryEdited):
        new = replace(state, query=event.text or "")
        if new.expanded_index != -1:
            # the filtered list may have shrunk or shifted under the selection
            new = _expand(new, new.expanded_index, report)
        return new, (ReplaceAddress(new.address, reload=False),)

    if isinstance(event, Navigated):
        spec = route_for_path(event.address.path)
        # q is shared by every route; a bare route link keeps the current query
        query = event.address.get(QUERY_PARAM)
        new = ViewState(
            route=spec.name,
            bucket=spec.bucket,
            query=state.query if query is None else query,
        )
        commands: Tuple[Command, ...] = (SetTitle(spec.title),)
        if query is None and new.query:
            commands += (ReplaceAddress(new.address, reload=False),)
        return new, commands

    if isinstance(event, ItemToggled):
        if event.index == state.expanded_index:
            return _collapsed(state), ()
        return _expand(state, event.index, report), ()

    raise TypeError(f"unknown view event: {event!r}")


def state_from_dict(data: Mapping[str, Any], report: Report) -> ViewState:
    """
    Rebuild a state sent back by the browser. Only route, query and the
    expanded index are taken from the client; bucket and stats are derived.
    """
    spec = ROUTES.get(str(data.get("route") or ""), DEFAULT_ROUTE)
    query = data.get("query")
    state = ViewState(route=spec.name, bucket=spec.bucket, query=query if isinstance(query, str) else "")

    index = data.get("expanded_index", -1)
    if isinstance(index, int) and not isinstance(index, bool) and index != -1:
        state = _expand(state, index, report)
    return state
