import logging
import os

from flask import Flask

from .api import create_api_blueprint
from .config import HousekeepingConfig
from .orchestrator import Housekeeper


def create_app(config: HousekeepingConfig | None = None) -> Flask:
    app = Flask(__name__)

    log_level = str(os.getenv("HK_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO))

    housekeeper = Housekeeper(config or HousekeepingConfig.from_env())

    last_status = None
    try:
        last_status = housekeeper.run()
    except Exception:
        logging.getLogger("housekeeping").warning(
            "[HOUSEKEEPING]: Startup housekeeping failed; will retry on next request",
            exc_info=True,
        )

    app.register_blueprint(
        create_api_blueprint(housekeeper=housekeeper, last_status=last_status),
        url_prefix="/api",
    )
    app.extensions["housekeeper"] = housekeeper

    return app


def main() -> None:
    app = create_app()
    api_port = int(str(os.getenv("HK_API_PORT", "9110")))
    app.run(host="127.0.0.1", port=api_port)


if __name__ == "__main__":
    main()
