from __future__ import annotations

import logging

from flask import Blueprint, jsonify

from .errors import HousekeepingError
from .models import HousekeepingStatus
from .orchestrator import Housekeeper


LOGGER = logging.getLogger("housekeeping")


def create_api_blueprint(*, housekeeper: Housekeeper, last_status: HousekeepingStatus | None = None) -> Blueprint:
    blueprint = Blueprint("housekeeping_api", __name__)
    state: dict[str, HousekeepingStatus | None] = {"last_status": last_status}

    @blueprint.route("/housekeeping", methods=["GET", "POST"])
    def housekeeping() -> tuple:
        try:
            status = housekeeper.run()
        except HousekeepingError as exc:
            LOGGER.error("[HOUSEKEEPING]: Housekeeping failed: %s", exc)
            return jsonify({"error": str(exc)}), 500

        state["last_status"] = status
        return jsonify(status.to_dict()), 200

    @blueprint.get("/health")
    def health() -> tuple:
        last = state["last_status"]
        return (
            jsonify(
                {
                    "status": "ok",
                    "last_status": last.to_dict() if last is not None else None,
                }
            ),
            200,
        )

    return blueprint
