## routes.py
from __future__ import annotations

from typing import Any, Mapping

from flask import Blueprint, Response, abort, current_app, jsonify, render_template, request

from crawl_explorer.services.explorer_service import ExplorerService
from crawl_explorer.services.view_state import (
    ROUTES,
    Event,
    ItemToggled,
    Navigated,
    NavigationAddress,
    QueryEdited,
    state_from_dict,
)


def _safe_int(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    raw = str(raw or "").strip()
    if (raw[1:] if raw.startswith("-") else raw).isdigit():
        return int(raw)
    return None


def _parse_event(raw: Mapping[str, Any]) -> Event | None:
    kind = str(raw.get("type") or "").strip()

    if kind == "query":
        value = raw.get("value")
        if value is not None and not isinstance(value, str):
            return None
        return QueryEdited(value)

    if kind == "toggle":
        index = _safe_int(raw.get("index"))
        return ItemToggled(index) if index is not None else None

    if kind == "navigate":
        url = raw.get("url")
        return Navigated(NavigationAddress.from_url(url)) if isinstance(url, str) else None

    return None


def create_blueprint(explorer: ExplorerService) -> Blueprint:
    bp = Blueprint("web", __name__)

    def render_results():
        page = explorer.open_address(NavigationAddress(request.path, request.args.to_dict()))

        if not page.report_ok:
            current_app.logger.warning("Report flagged as unsuccessful; showing %d item(s)", page.total)

        return render_template(
            "index.html",
            page=page,
            routes=ROUTES,
            summary=explorer.summary(),
        )

    @bp.get("/")
    def index():
        return render_results()

    @bp.get("/results/success")
    def results_success():
        return render_results()

    @bp.get("/results/failed")
    def results_failed():
        return render_results()

    @bp.get("/raw/data")
    def raw_data():
        page = explorer.open(request.path)
        return render_template(
            "raw.html",
            page=page,
            routes=ROUTES,
            raw_json=explorer.store.report.raw_json,
        )

    @bp.get("/hosts")
    def hosts():
        return Response(explorer.store.report.host_file, mimetype="text/plain")

    @bp.get("/api/report")
    def report_summary():
        return jsonify(explorer.summary())

    @bp.post("/api/view/events")
    def view_event():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            abort(400)

        state_raw = body.get("state", {})
        event_raw = body.get("event", {})
        if not isinstance(state_raw, dict) or not isinstance(event_raw, dict):
            abort(400)

        event = _parse_event(event_raw)
        if event is None:
            current_app.logger.info("Rejected view event: %r", event_raw)
            abort(400)

        state = state_from_dict(state_raw, explorer.store.report)
        page = explorer.dispatch(state, event)

        current_app.logger.debug(
            "view event %s -> route=%s q=%r expanded=%d",
            type(event).__name__, page.state.route, page.state.query, page.state.expanded_index,
        )
        return jsonify(page.as_dict())

    return bp
