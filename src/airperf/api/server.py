"""Flask application exposing the calculation endpoints.

Typical usage:
    app = create_app(load_settings("config/settings.yaml"))
    app.run(host="127.0.0.1", port=5000)
"""

from flask import Flask, jsonify, request

from airperf import __version__
from airperf.api.handlers import RequestHandler
from airperf.core.config import ConfigLoader, load_settings
from airperf.core.logging_system import get_logger
from airperf.systems.performance.performance_calculator import PerformanceCalculator
from airperf.systems.performance.table import (
    PerformanceTableLookup,
    PerformanceTableSource,
    YamlPerformanceTableSource,
)

logger = get_logger(__name__)


def create_app(
    settings: ConfigLoader | None = None,
    table_source: PerformanceTableSource | None = None,
) -> Flask:
    """Build the Flask application.

    The performance table is read here, once, so a missing or malformed
    dataset stops the server from starting.

    Args:
        settings: Effective settings; built-in defaults when omitted
        table_source: Performance table source; the configured YAML file
            (or the packaged dataset) when omitted

    Returns:
        Configured Flask application.

    Raises:
        DataUnavailable: If the performance table cannot be loaded.
    """
    settings = settings or load_settings()
    if table_source is None:
        table_source = YamlPerformanceTableSource(settings.get("performance.table_path"))

    lookup = PerformanceTableLookup(table_source)
    lookup.load()
    handler = RequestHandler(PerformanceCalculator(lookup))

    app = Flask(__name__)
    app.config["AIRPERF_SETTINGS"] = settings.to_dict()

    @app.post("/api/performance")
    def performance():
        body, status = handler.performance(request.get_json(silent=True))
        return jsonify(body), status

    @app.post("/api/weight-balance")
    def weight_balance():
        body, status = handler.weight_balance(request.get_json(silent=True))
        return jsonify(body), status

    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok", "version": __version__})

    logger.info("AirPerf server ready (%s)", __version__)
    return app
