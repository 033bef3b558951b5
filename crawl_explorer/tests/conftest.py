from __future__ import annotations

import pytest

from crawl_explorer.domain.models import Asset, Report, RequestInfo, ResultItem


def make_item(
    url: str = "https://example.com/",
    *,
    error: str = "",
    score: float = 10.0,
    ip: str | None = "10.0.0.1",
    response: dict | None = None,
    assets: tuple | None = None,
) -> ResultItem:
    return ResultItem(
        url=url,
        error_string=error,
        score=score,
        request=RequestInfo(ip=ip) if ip is not None else None,
        response=response,
        assets=assets,
    )


@pytest.fixture
def sample_report() -> Report:
    """
    0: clean, response present           -> Success only
    1: error, no response                -> Failed only
    2: low score, response present       -> Failed only
    3: clean, no response                -> Success and Failed (response rule)
    4: error, response present           -> Failed only
    """
    return Report(
        success=True,
        min_score=5.0,
        successful=2,
        failed=3,
        items=(
            make_item(
                "https://good.example.com/",
                ip="10.0.0.1",
                response={"Code": 200},
                assets=(
                    Asset("text/html; charset=utf-8", 200, 2048),
                    Asset("text/css", 200, 512),
                    Asset("text/html", 200, 0),
                ),
            ),
            make_item("https://down.example.com/", error="dial tcp: timeout", score=0, ip="10.0.0.2"),
            make_item(
                "https://slow.example.org/",
                score=3,
                ip="192.168.1.5",
                response={"Code": 200},
                assets=(Asset("image/png", 200, 100),),
            ),
            make_item("https://nobody.example.org/", ip=None),
            make_item("https://broken.example.net/", error="tls: bad cert", score=7, response={"Code": 500}),
        ),
    )
