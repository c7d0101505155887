import json
import logging

import pytest
import structlog

from tilesight.utils.logging_utils import RENDERERS, parse_level, setup_logging


@pytest.fixture
def restore_structlog():
    yield
    structlog.reset_defaults()


def test_parse_level():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("WARNING") == logging.WARNING
    with pytest.raises(ValueError):
        parse_level("chatty")


def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        setup_logging(logging.INFO, "xml")


def test_json_renderer_emits_one_object_per_event(restore_structlog):
    setup_logging(logging.INFO, "json")
    processors = structlog.get_config()["processors"]
    line = processors[-1](None, "info", {"event": "FOV computed", "radius": 4})
    assert json.loads(line) == {"event": "FOV computed", "radius": 4}


def test_debug_adds_callsite(restore_structlog):
    setup_logging(logging.DEBUG, "console")
    kinds = [type(p) for p in structlog.get_config()["processors"]]
    assert structlog.processors.CallsiteParameterAdder in kinds
    setup_logging(logging.INFO, "console")
    kinds = [type(p) for p in structlog.get_config()["processors"]]
    assert structlog.processors.CallsiteParameterAdder not in kinds


def test_renderer_table():
    assert set(RENDERERS) == {"console", "json"}
