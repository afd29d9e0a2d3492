"""Tests for the configuration switch."""

from __future__ import annotations

import logging

from eventhub import ConfigType, EventHub, get_config, use_config
from eventhub.config import Config, ProductionConfig, TestingConfig


def test_default_config_is_production():
    """Test that production settings are active by default."""
    assert get_config() is ProductionConfig
    assert get_config().TRACE_DISPATCH is False
    assert issubclass(get_config(), Config)


def test_use_config_returns_previous():
    """Test that use_config switches config and returns the previous one."""
    previous = use_config(ConfigType.TESTING)
    try:
        assert previous is ConfigType.PRODUCTION
        assert get_config() is TestingConfig
    finally:
        use_config(previous)

    assert get_config() is ProductionConfig


def test_trace_dispatch_logs_handler_calls(testing_config, caplog):
    """Test that TRACE_DISPATCH logs every handler call."""
    caplog.set_level(logging.DEBUG, logger="eventhub")
    hub = EventHub()

    def on_ready(event):
        pass

    hub.on("ready", on_ready).emit("ready")

    assert any("Dispatching << ready >>" in message for message in caplog.messages)


def test_no_dispatch_logs_in_production(caplog):
    """Test that handler calls are not logged with production settings."""
    caplog.set_level(logging.DEBUG, logger="eventhub")
    hub = EventHub()
    hub.on("ready", lambda event: None).emit("ready")

    assert any("Registered handler" in message for message in caplog.messages)
    assert not any("Dispatching" in message for message in caplog.messages)
