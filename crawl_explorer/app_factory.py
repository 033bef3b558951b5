from __future__ import annotations

from typing import Optional

from flask import Flask

from crawl_explorer.config.ini_config import AppSettings, IniConfig
from crawl_explorer.repositories.report_repository import ReportStore
from crawl_explorer.services.explorer_service import ExplorerService
from crawl_explorer.web.routes import create_blueprint


def create_app(settings: Optional[AppSettings] = None, store: Optional[ReportStore] = None) -> Flask:
    if settings is None:
        settings = IniConfig.from_env_or_default().load_settings()

    # the report is read once per process and never changes afterwards
    if store is None:
        store = ReportStore.load(settings.report_json)

    explorer = ExplorerService(store=store, title_suffix=settings.title_suffix)

    app = Flask(__name__)
    app.register_blueprint(create_blueprint(explorer))

    app.config["HOST"] = settings.flask_host
    app.config["PORT"] = settings.flask_port
    app.config["DEBUG"] = settings.flask_debug

    if not store.success:
        app.logger.warning("Report %s was not produced successfully; continuing with %d item(s)",
                           settings.report_json, len(store.items))

    return app

#############################
#
# Layout
# •	app_factory.py: composition root. Loads settings, reads the report once,
#   builds ExplorerService and registers the "web" blueprint.
# •	config/: INI -> AppSettings (APP_INI overrides the default location).
# •	domain/: frozen dataclasses only (Report, ResultItem, Asset, Bucket, RouteSpec).
# •	repositories/: ReportStore, JSON ingestion that degrades instead of raising.
# •	services/: the engine. classification, query_filter, asset_stats and
#   breadcrumbs are pure functions; view_state is the reducer
#   (event -> new state + commands); explorer_service turns a state into a PageModel.
# •	web/: Flask blueprint. No filtering or classification happens here.
# •	templates/: Jinja templates. Browser keeps the ViewState between events and
#   posts each event to /api/view/events, then applies the returned commands
#   (replace_address -> history.replaceState, so the view never reloads while typing).
