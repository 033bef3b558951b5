from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

from crawl_explorer.domain.models import AssetStats, Bucket, ResultItem
from crawl_explorer.repositories.report_repository import ReportStore
from crawl_explorer.services.asset_stats import asset_status, normalize_content_type
from crawl_explorer.services.breadcrumbs import derive, page_title
from crawl_explorer.services.classification import classify
from crawl_explorer.services.view_state import (
    Command,
    Event,
    NavigationAddress,
    SetTitle,
    ViewState,
    initial_state,
    reduce,
    visible_items,
)


@dataclass(frozen=True)
class AssetRow:
    content_type: str
    status: str


@dataclass(frozen=True)
class ItemRow:
    index: int
    url: str
    ip: str
    score: float
    error_string: str
    status_code: Optional[int]
    passed: bool
    assets: Tuple[AssetRow, ...] = ()


@dataclass(frozen=True)
class PageModel:
    state: ViewState
    title: str
    document_title: str
    breadcrumb: str
    items: Tuple[ItemRow, ...]
    stats: AssetStats
    total: int
    report_ok: bool
    commands: Tuple[Command, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.as_dict(),
            "title": self.title,
            "document_title": self.document_title,
            "breadcrumb": self.breadcrumb,
            "items": [asdict(row) for row in self.items],
            "stats": self.stats.as_dict(),
            "total": self.total,
            "report_ok": self.report_ok,
            "commands": [c.as_dict() for c in self.commands],
        }


@dataclass
class ExplorerService:
    """
    Service layer: everything the web layer needs to render one view of the
    report. Routes stay thin and never filter or classify on their own.
    """
    store: ReportStore
    title_suffix: str = ""

    def open(self, url: str) -> PageModel:
        return self.open_address(NavigationAddress.from_url(url))

    def open_address(self, address: NavigationAddress) -> PageModel:
        state = initial_state(address)
        return self.render(state, (SetTitle(state.route_spec.title),))

    def dispatch(self, state: ViewState, event: Event) -> PageModel:
        new_state, commands = reduce(state, event, self.store.report)
        return self.render(new_state, commands)

    def render(self, state: ViewState, commands: Tuple[Command, ...] = ()) -> PageModel:
        report = self.store.report
        items = visible_items(state, report)
        title = state.route_spec.title

        return PageModel(
            state=state,
            title=title,
            document_title=page_title(title, self.title_suffix),
            breadcrumb=derive(state.address.to_url()),
            items=tuple(self._row(i, it, state.expanded_index == i) for i, it in enumerate(items)),
            stats=state.stats,
            total=len(report.items),
            report_ok=report.success,
            commands=commands,
        )

    def _row(self, index: int, item: ResultItem, expanded: bool) -> ItemRow:
        assets: Tuple[AssetRow, ...] = ()
        if expanded and item.assets:
            assets = tuple(
                AssetRow(content_type=normalize_content_type(a.content_type), status=asset_status(a))
                for a in item.assets
            )

        return ItemRow(
            index=index,
            url=item.url,
            ip=item.request.ip if item.request else "",
            score=item.score,
            error_string=item.error_string,
            status_code=item.status_code,
            passed=classify(item, Bucket.SUCCESS, self.store.min_score),
            assets=assets,
        )

    def summary(self) -> Dict[str, Any]:
        report = self.store.report
        return {
            "success": report.success,
            "version": report.version,
            "time_scanned": report.time_scanned,
            "min_score": report.min_score,
            "total": len(report.items),
            # counts as the crawler reported them
            "successful": report.successful,
            "failed": report.failed,
        }
