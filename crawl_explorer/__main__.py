import logging

from crawl_explorer.app_factory import create_app
from crawl_explorer.config.ini_config import IniConfig

if __name__ == "__main__":
    settings = IniConfig.from_env_or_default().load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings)
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])
