# tests/test_event_store.py
import json
from unittest.mock import MagicMock

import pytest
import requests

from event_search.utils.config_manager import Config
from event_search.utils.event_store import (
    CachedEventSource,
    EventSourceError,
    HttpEventSource,
    JsonFileSource,
    source_from_config,
)


def fake_session(payload=None, status=200, exc=None):
    session = MagicMock()
    if exc is not None:
        session.get.side_effect = exc
        return session
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.json.return_value = payload
    session.get.return_value = resp
    return session


def test_json_file_list(tmp_path, events):
    path = tmp_path / "events.json"
    path.write_text(json.dumps(events), encoding="utf-8")
    assert JsonFileSource(str(path)).load() == events


def test_json_file_wrapped_and_filtered(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps({"events": [{"id": 1}, "junk", 3]}), encoding="utf-8")
    assert JsonFileSource(str(path)).load() == [{"id": 1}]


def test_json_file_missing_or_bad(tmp_path):
    with pytest.raises(EventSourceError):
        JsonFileSource(str(tmp_path / "nope.json")).load()
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(EventSourceError):
        JsonFileSource(str(bad)).load()
    scalar = tmp_path / "scalar.json"
    scalar.write_text("42", encoding="utf-8")
    with pytest.raises(EventSourceError):
        JsonFileSource(str(scalar)).load()


def test_http_source_ok(events):
    session = fake_session(events)
    src = HttpEventSource("http://example.test/api/events", timeout=3, session=session)
    assert src.load() == events
    session.get.assert_called_once()
    args, kwargs = session.get.call_args
    assert args[0] == "http://example.test/api/events"
    assert kwargs["timeout"] == 3


def test_http_source_bad_status():
    src = HttpEventSource("http://x/api/events", session=fake_session(status=503))
    with pytest.raises(EventSourceError, match="Failed to fetch events"):
        src.load()


def test_http_source_network_error():
    session = fake_session(exc=requests.ConnectionError("down"))
    with pytest.raises(EventSourceError):
        HttpEventSource("http://x/api/events", session=session).load()


def test_http_source_bad_json():
    session = fake_session()
    session.get.return_value.json.side_effect = ValueError("no json")
    with pytest.raises(EventSourceError):
        HttpEventSource("http://x/api/events", session=session).load()


def test_cache_miss_fills_cache(tmp_path, events):
    primary = MagicMock()
    primary.load.return_value = events
    cache = tmp_path / "cache" / "events.json"
    src = CachedEventSource(primary, str(cache))

    assert src.load() == events
    assert json.loads(cache.read_text(encoding="utf-8")) == events
    # second load comes from the file
    assert src.load() == events
    assert primary.load.call_count == 1


def test_cache_hit_skips_primary(tmp_path):
    cache = tmp_path / "events.json"
    cache.write_text(json.dumps([{"id": 5, "name": "Cached"}]), encoding="utf-8")
    primary = MagicMock()
    assert CachedEventSource(primary, str(cache)).load() == [{"id": 5, "name": "Cached"}]
    primary.load.assert_not_called()


def test_corrupt_cache_falls_back(tmp_path, events):
    cache = tmp_path / "events.json"
    cache.write_text("garbage", encoding="utf-8")
    primary = MagicMock()
    primary.load.return_value = events
    assert CachedEventSource(primary, str(cache)).load() == events


def test_primary_errors_propagate(tmp_path):
    primary = MagicMock()
    primary.load.side_effect = EventSourceError("boom")
    with pytest.raises(EventSourceError):
        CachedEventSource(primary, str(tmp_path / "c.json")).load()


def test_invalidate(tmp_path):
    cache = tmp_path / "events.json"
    cache.write_text("[]", encoding="utf-8")
    src = CachedEventSource(MagicMock(), str(cache))
    src.invalidate()
    assert not cache.exists()
    src.invalidate()


def test_source_from_config(tmp_path):
    cfg = Config(str(tmp_path / "missing.json"))
    assert isinstance(source_from_config(cfg, "events.json"), JsonFileSource)
    assert isinstance(source_from_config(cfg), JsonFileSource)
    cfg.data["events_url"] = "http://x/api/events"
    src = source_from_config(cfg)
    assert isinstance(src, CachedEventSource)
    assert isinstance(src.primary, HttpEventSource)
