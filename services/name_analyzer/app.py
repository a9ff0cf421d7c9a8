"""
Name Analyzer Service.
Exposes /analyze, /health and /metrics.

Run locally with ``name-analyzer`` (or ``python -m name_analyzer.app``); under
a WSGI server use the factory, e.g. ``gunicorn "name_analyzer.app:create_app()"``.
"""
import time
import uuid

import structlog
from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException
from werkzeug.serving import run_simple

from name_analyzer import metrics
from name_analyzer.analyzer import InvalidInputError, analyze
from name_analyzer.config import Settings
from name_analyzer.logs import configure_logging, get_logger

log = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def request_id_from(headers) -> str:
    """Incoming X-Request-ID, or a new uuid4 hex id when missing or too long."""
    supplied = headers.get(REQUEST_ID_HEADER, "")
    if supplied and len(supplied) <= MAX_REQUEST_ID_LENGTH:
        return supplied
    return uuid.uuid4().hex


def create_app(settings=None):
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    @app.before_request
    def start_request():
        g.request_start = time.perf_counter()
        g.request_id = request_id_from(request.headers)
        g.in_flight = True
        metrics.REQUESTS_IN_FLIGHT.inc()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            service=settings.service_name, request_id=g.request_id
        )

    @app.after_request
    def finish_request(response):
        duration = time.perf_counter() - g.get("request_start", time.perf_counter())
        rule = request.url_rule
        endpoint = rule.rule if rule is not None else metrics.UNMATCHED

        metrics.track_request(request.method, endpoint, response.status_code, duration)
        response.headers[REQUEST_ID_HEADER] = g.get("request_id", "")
        log.info(
            "request_completed",
            method=request.method,
            path=request.path,
            status=response.status_code,
            duration_ms=round(duration * 1000, 3),
        )
        return response

    @app.teardown_request
    def end_request(exc):
        if g.pop("in_flight", False):
            metrics.REQUESTS_IN_FLIGHT.dec()
        structlog.contextvars.clear_contextvars()

    @app.errorhandler(InvalidInputError)
    def invalid_input(exc):
        log.warning("invalid_input", error=str(exc))
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(HTTPException)
    def http_error(exc):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def unhandled_exception(exc):
        log.error("unhandled_exception", exc_info=exc)
        return jsonify({"error": "internal server error"}), 500

    @app.route("/health")
    def health():
        """Liveness and readiness: return 200 with status ok."""
        return jsonify({"status": "ok", "service": settings.service_name}), 200

    @app.route("/analyze")
    def analyze_name():
        name = request.args.get("name")
        if name is None:
            raise InvalidInputError("missing required query parameter: name")

        result = analyze(name, max_length=settings.max_name_length)
        metrics.NAME_LENGTH.observe(result.length)
        log.debug("name_analyzed", length=result.length, complexity=result.complexity)
        return jsonify(result.to_dict()), 200

    app.add_url_rule("/metrics", "metrics", metrics.metrics)

    return app


def main():
    settings = Settings.from_env()
    app = create_app(settings)
    log.info("service_starting", service=settings.service_name, host=settings.host, port=settings.port)
    # app.run would also echo Flask's plain-text banner to stdout
    run_simple(settings.host, settings.port, app, threaded=True)


if __name__ == "__main__":
    main()
