import json
import logging
import threading
from urllib.error import HTTPError
from urllib.request import urlopen

import pytest
import structlog
from werkzeug.serving import make_server

from name_analyzer.app import create_app
from name_analyzer.logs import configure_logging, get_logger


def test_events_are_json_lines(capsys):
    configure_logging("INFO")
    get_logger("test").info("something_happened", answer=42)

    line = capsys.readouterr().out.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "something_happened"
    assert event["level"] == "info"
    assert event["answer"] == 42
    assert event["ts"].endswith("Z")


def test_events_below_level_are_dropped(capsys):
    configure_logging("WARNING")
    log = get_logger("test")
    log.info("quiet")
    log.warning("loud")

    lines = capsys.readouterr().out.strip().splitlines()
    events = [json.loads(line)["event"] for line in lines]
    assert events == ["loud"]


def test_exceptions_are_rendered(capsys):
    configure_logging("INFO")
    try:
        raise RuntimeError("boom")
    except RuntimeError as exc:
        get_logger("test").error("failed", exc_info=exc)

    event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert event["level"] == "error"
    assert "RuntimeError: boom" in event["exception"]


def test_stdlib_records_are_json_lines(capsys):
    configure_logging("INFO")
    logging.getLogger("werkzeug").warning("port %d busy", 8080)

    event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert event["event"] == "port 8080 busy"
    assert event["level"] == "warning"
    assert event["logger"] == "werkzeug"
    assert "ts" in event


def test_reconfiguring_updates_stdlib_levels():
    configure_logging("DEBUG")
    configure_logging("ERROR")

    root = logging.getLogger()
    assert root.level == logging.ERROR
    assert logging.getLogger("werkzeug").level == logging.ERROR
    json_handlers = [
        h for h in root.handlers
        if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    assert len(json_handlers) == 1


def test_werkzeug_access_log_is_left_to_request_completed():
    configure_logging("DEBUG")
    assert logging.getLogger("werkzeug").level == logging.WARNING


def test_served_requests_write_only_json_lines(capsys, settings):
    server = make_server("127.0.0.1", 0, create_app(settings), threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    base = f"http://127.0.0.1:{server.server_port}"
    try:
        with urlopen(f"{base}/analyze?name=hello") as resp:
            assert resp.status == 200
        with pytest.raises(HTTPError) as excinfo:
            urlopen(f"{base}/analyze")
        assert excinfo.value.code == 400
        excinfo.value.close()
    finally:
        server.shutdown()
        thread.join()

    lines = capsys.readouterr().out.strip().splitlines()
    events = [json.loads(line) for line in lines]
    assert all({"level", "event", "ts"} <= event.keys() for event in events)
    completed = [e for e in events if e["event"] == "request_completed"]
    assert [e["status"] for e in completed] == [200, 400]
    assert all(e["request_id"] for e in completed)
