"""HTTP entrypoint that proxies the hospital registry and serves the finder page."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from flask import Flask, jsonify, render_template, request
from werkzeug.exceptions import MethodNotAllowed, NotFound

from hospital_locator.core.config import ConfigError, get_settings
from hospital_locator.jobs.search import run_search
from hospital_locator.models import GeoPoint
from hospital_locator.vendors import data_gov
from hospital_locator.view.render import EMPTY_TIPS, build_rows
from hospital_locator.view.state import SearchController, ViewState

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)
# Upstream bodies are passed through; keep their key order.
app.json.sort_keys = False

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /health",
    "GET /hospitals?pincode=<pincode>",
    "GET /api/hospitals?pincode=<pincode>",
    "GET /finder?pincode=<pincode>&lat=<lat>&lng=<lng>",
]

INTERNAL_ERROR = "Internal server error"

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Static description of the service."""
    return (
        jsonify(
            {
                "service": "hospital-locator",
                "description": "Find hospitals by pincode using the data.gov.in hospital directory.",
                "endpoints": {
                    "/hospitals": "Proxy to the registry, optional ?pincode= filter",
                    "/api/hospitals": "Alias of /hospitals",
                    "/health": "Liveness probe",
                    "/finder": "HTML search page",
                },
            }
        ),
        200,
    )


@app.get("/health")
def healthcheck() -> Any:
    return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}), 200


@app.get("/hospitals")
@app.get("/api/hospitals")
def list_hospitals() -> Any:
    """Forward a pincode query to the registry and return its JSON untouched."""
    pincode = request.args.get("pincode") or None

    try:
        payload = data_gov.fetch_hospitals(pincode, settings=get_settings())
    except ConfigError as exc:
        return jsonify({"error": str(exc)}), 500
    except data_gov.DataGovError as exc:
        logger.error("Registry lookup failed for pincode=%s: %s", pincode, exc)
        return jsonify({"error": INTERNAL_ERROR}), 500
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected failure for pincode=%s: %s", pincode, exc)
        return jsonify({"error": INTERNAL_ERROR}), 500

    return jsonify(payload), 200


@app.get("/finder")
def finder() -> Any:
    """Server-rendered search page: form, state message and result rows."""
    pincode = request.args.get("pincode", "")
    user_location = GeoPoint.parse(request.args.get("lat"), request.args.get("lng"))

    controller = SearchController()
    try:
        state = run_search(pincode, controller=controller, settings=get_settings())
    except ConfigError:
        state = controller.state

    return (
        render_template(
            "finder.html",
            state=state,
            view=state.view_state.value,
            rows=build_rows(state.hospitals, user_location) if state.view_state is ViewState.RESULTS else [],
            tips=EMPTY_TIPS,
            user_location=user_location,
        ),
        200,
    )


@app.errorhandler(NotFound)
@app.errorhandler(MethodNotAllowed)
def route_not_found(exc: Exception) -> Any:
    return (
        jsonify(
            {
                "error": "Not Found",
                "message": f"Cannot {request.method} {request.path}",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            }
        ),
        404,
    )


def main() -> None:
    settings = get_settings()
    logger.info("[BOOT] Binding on 0.0.0.0:%d", settings.port)
    app.run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
