from __future__ import annotations

import pytest

from crawl_explorer.repositories.report_repository import ReportStore
from crawl_explorer.services.explorer_service import ExplorerService
from crawl_explorer.services.view_state import ItemToggled, QueryEdited, SetTitle


@pytest.fixture
def explorer(sample_report) -> ExplorerService:
    return ExplorerService(store=ReportStore(sample_report), title_suffix="Crawl Explorer")


def test_open_builds_page_for_route(explorer):
    page = explorer.open("/results/failed?q=example.org")

    assert page.title == "Failed Results"
    assert page.document_title == "Failed Results - Crawl Explorer"
    assert page.breadcrumb == "/ Results / Failed"
    assert [row.url for row in page.items] == ["https://slow.example.org/", "https://nobody.example.org/"]
    assert [row.index for row in page.items] == [0, 1]
    assert page.commands == (SetTitle("Failed Results"),)
    assert page.total == 5


def test_dashboard_breadcrumb(explorer):
    assert explorer.open("/?q=x").breadcrumb == "/ Dashboard"


def test_rows_carry_display_fields(explorer):
    page = explorer.open("/")
    first = page.items[0]
    assert first.ip == "10.0.0.1"
    assert first.status_code == 200
    assert first.passed is True
    assert first.assets == ()     # only expanded rows carry asset lines

    nobody = page.items[3]
    assert nobody.ip == ""
    assert nobody.status_code is None


def test_dispatch_toggle_exposes_assets_and_stats(explorer):
    page = explorer.open("/")
    page = explorer.dispatch(page.state, ItemToggled(0))

    assert page.stats.as_dict() == {"labels": ["text/html", "text/css"], "data": [2, 1]}
    assert [a.status for a in page.items[0].assets] == [
        "Status: 200 Size: 2.00kb",
        "Status: 200 Size: 0.50kb",
        "Status: 200",
    ]
    assert page.items[0].assets[0].content_type == "text/html"


def test_dispatch_query_returns_replace_address(explorer):
    page = explorer.dispatch(explorer.open("/results/success").state, QueryEdited("abc"))
    data = page.as_dict()

    assert data["commands"] == [{"type": "replace_address", "url": "/results/success?q=abc", "reload": False}]
    assert data["state"]["query"] == "abc"
    assert data["items"] == []
    assert data["breadcrumb"] == "/ Results / Success"


def test_summary_counts(explorer):
    summary = explorer.summary()
    assert summary["total"] == 5
    # taken from the report, not recounted: item 3 would land in both buckets
    assert summary["successful"] == 2
    assert summary["failed"] == 3
    assert summary["min_score"] == 5.0
