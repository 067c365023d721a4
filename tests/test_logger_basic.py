from __future__ import annotations

import json
import logging

from fake_irc.logs import event_catalog
from fake_irc.logs.logger import ServerLogger


def test_logger_template_and_fallback(caplog, monkeypatch) -> None:
    monkeypatch.delenv("DEBUG", raising=False)
    log = ServerLogger("test_logger")
    caplog.set_level(logging.INFO)

    log.log_event("server", "listening", host="127.0.0.1", port=1234)
    log.log_event("custom_domain", "custom_action", extra_field=123)

    msgs = [r.message for r in caplog.records]
    assert any("Listening on 127.0.0.1:1234" in m for m in msgs)
    assert any("custom domain: custom action" in m for m in msgs)


def test_logger_prefix_with_nick_and_peer(caplog, monkeypatch) -> None:
    monkeypatch.delenv("DEBUG", raising=False)
    log = ServerLogger("test_logger_prefix")
    caplog.set_level(logging.INFO)

    log.log_event("irc", "registered", nick="alice", peer="127.0.0.1:5555")
    log.log_event("irc", "connection_closed", peer="127.0.0.1:5556")
    log.log_event("relay", "input_ended")

    msgs = [r.message for r in caplog.records]
    assert msgs[0].startswith("[alice@127.0.0.1:5555")
    assert "Registration complete for alice" in msgs[0]
    assert msgs[1].startswith("[*@127.0.0.1:5556")
    assert msgs[2].startswith("[server")


def test_logger_missing_template_field_keeps_template(caplog) -> None:
    log = ServerLogger("test_logger_missing")
    caplog.set_level(logging.INFO)
    log.log_event("server", "listening")
    assert any("Listening on {host}:{port}" in r.message for r in caplog.records)


def test_logger_debug_alignment(caplog, monkeypatch) -> None:
    monkeypatch.setenv("DEBUG", "1")
    log = ServerLogger("test_logger_debug")
    caplog.set_level(logging.DEBUG)
    log.log_event("relay", "broadcast", level=logging.DEBUG, targets=2, line="hi")
    first = caplog.records[0].message
    assert first.startswith("relay_broadcast")
    assert len(first.split("[")[0]) >= 28
    assert "(targets=2, line=hi)" in first


def test_logger_respects_level(caplog) -> None:
    log = ServerLogger("test_logger_level")
    log.logger.setLevel(logging.INFO)
    caplog.set_level(logging.INFO)
    log.log_event("irc", "send", level=logging.DEBUG, line="x")
    assert caplog.records == []


def test_reload_event_templates_from_file(tmp_path) -> None:
    path = tmp_path / "templates.json"
    path.write_text(json.dumps({"demo": {"hello": "Hi {name}"}}), encoding="utf-8")
    try:
        event_catalog.reload_event_templates(path)
        assert event_catalog.EVENT_TEMPLATES[("demo", "hello")] == "Hi {name}"
    finally:
        event_catalog.reload_event_templates()
    assert ("demo", "hello") not in event_catalog.EVENT_TEMPLATES


def test_missing_templates_file(tmp_path) -> None:
    try:
        event_catalog.reload_event_templates(tmp_path / "absent.json")
        assert event_catalog.EVENT_TEMPLATES == {
            ("app", "load_error"): "Event templates file missing"
        }
    finally:
        event_catalog.reload_event_templates()



def test_relay_input_skipped_template(caplog, monkeypatch) -> None:
    monkeypatch.delenv("DEBUG", raising=False)
    caplog.set_level(logging.WARNING)
    log = ServerLogger("test_logger_input_skipped")
    log.log_event("relay", "input_skipped", level=logging.WARNING, error="bad byte")
    assert caplog.records[0].message.endswith(
        "Skipping broadcast input line that is not valid UTF-8: bad byte"
    )
