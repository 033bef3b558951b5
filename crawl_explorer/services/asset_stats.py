from __future__ import annotations

from typing import Dict, Optional

from crawl_explorer.domain.models import EMPTY_STATS, Asset, AssetStats, ResultItem


def normalize_content_type(content_type: str) -> str:
    # "text/html; charset=utf-8" -> "text/html"
    idx = content_type.find(";")
    return content_type if idx == -1 else content_type[:idx]


def aggregate(item: Optional[ResultItem]) -> AssetStats:
    """Content-type histogram of an item's assets, in first-seen order."""
    if item is None or not item.assets:
        return EMPTY_STATS

    counts: Dict[str, int] = {}
    for asset in item.assets:
        ctype = normalize_content_type(asset.content_type)
        counts[ctype] = counts.get(ctype, 0) + 1

    return AssetStats(labels=tuple(counts), data=tuple(counts.values()))


def asset_status(asset: Asset) -> str:
    out = f"Status: {asset.code}"

    if asset.content_length > 0:
        out += f" Size: {asset.content_length / 1024:,.2f}kb"

    if asset.error:
        out += f" Error: {asset.error}"

    return out
