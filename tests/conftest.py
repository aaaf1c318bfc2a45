# tests/conftest.py
import pytest

from event_search.utils import logger_utils


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path, monkeypatch):
    # keep Log/metric output out of the working tree
    monkeypatch.setattr(logger_utils, "DEFAULT_LOG_PATH", str(tmp_path / "logs" / "test.log"))


@pytest.fixture
def events():
    return [
        {
            "id": 1,
            "name": "Jazz Festival",
            "location": "Budapest",
            "description": "Three nights of live jazz by the Danube",
            "capacity": 500,
        },
        {
            "id": 2,
            "name": "Jazz Night",
            "location": "Vienna",
            "description": "Smoky club session",
        },
        {
            "id": 3,
            "name": "Budapest Marathon",
            "location": "Budapest",
            "description": "",
        },
    ]
