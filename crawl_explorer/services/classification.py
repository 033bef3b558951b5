from __future__ import annotations

from typing import Iterable, Optional, Tuple

from crawl_explorer.domain.models import Bucket, ResultItem
from crawl_explorer.services.query_filter import matches


def classify(item: ResultItem, bucket: Optional[Bucket], min_score: float) -> bool:
    """
    Bucket membership of a single result.

    Success and Failed are not complements: an item with a clean error string,
    a passing score and no response object belongs to both.
    """
    if bucket is None or bucket is Bucket.ALL:
        return True

    clean = item.error_string == "" and item.score >= min_score
    if bucket is Bucket.SUCCESS:
        return clean
    if bucket is Bucket.FAILED:
        return not (clean and item.response is not None)
    return True


def filter_items(
    items: Iterable[ResultItem],
    bucket: Optional[Bucket],
    min_score: float,
    query: Optional[str],
) -> Tuple[ResultItem, ...]:
    return tuple(it for it in items if classify(it, bucket, min_score) and matches(it, query))
