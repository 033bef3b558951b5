from __future__ import annotations


def derive(path: str) -> str:
    """
    "/results/failed?q=foo" -> "/ Results / Failed"
    "/" or "?q=x"           -> "/ Dashboard"
    """
    path = path or ""
    if "?" in path:
        path = path[: path.index("?")]

    parts = [p[:1].upper() + p[1:] for p in path.split("/") if p]
    if not parts:
        return "/ Dashboard"

    return "/ " + " / ".join(parts)


def page_title(title: str, suffix: str = "") -> str:
    title = (title or "").strip() or "--"
    return f"{title} - {suffix}" if suffix else title
