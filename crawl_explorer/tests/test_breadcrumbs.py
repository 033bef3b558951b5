import pytest

from crawl_explorer.services.breadcrumbs import derive, page_title


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/results/failed?q=foo", "/ Results / Failed"),
        ("/results/success", "/ Results / Success"),
        ("/", "/ Dashboard"),
        ("", "/ Dashboard"),
        ("?q=foo", "/ Dashboard"),
        ("/?q=a/b", "/ Dashboard"),
        ("//raw//data/", "/ Raw / Data"),
        ("/a/b/c/d/e", "/ A / B / C / D / E"),
        ("/raw/data?x=1?y=2", "/ Raw / Data"),
        ("/éte/Already", "/ Éte / Already"),
    ],
)
def test_derive(path, expected):
    assert derive(path) == expected


def test_page_title():
    assert page_title("Failed Results", "Crawl Explorer") == "Failed Results - Crawl Explorer"
    assert page_title("Failed Results") == "Failed Results"
    assert page_title("", "Crawl Explorer") == "-- - Crawl Explorer"
