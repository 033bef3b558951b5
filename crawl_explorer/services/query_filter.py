from __future__ import annotations

import math
from typing import Optional

from crawl_explorer.domain.models import ResultItem


def _as_finite_number(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def matches(item: ResultItem, query: Optional[str]) -> bool:
    """
    Free-text match over url, request ip and error string (plain, case-sensitive
    substring), plus a numeric branch: a query that reads as a number matches
    every item scoring at or below it.
    """
    if not query:
        return True

    if query in item.url:
        return True

    if item.request is not None and query in item.request.ip:
        return True

    number = _as_finite_number(query)
    if number is not None and number >= item.score:
        return True

    return query in item.error_string
