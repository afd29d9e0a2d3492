"""Pytest fixtures for eventhub tests."""

import pytest

from eventhub import ConfigType, get_emitter, use_config


class Recorder:
    """Handler that records every event it is called with."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def handle(self, event):
        self.events.append(event)


@pytest.fixture
def emitter():
    """A fresh emitter built with get_emitter()."""
    return get_emitter()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def testing_config():
    """Activate TestingConfig for one test."""
    previous = use_config(ConfigType.TESTING)
    yield
    use_config(previous)
