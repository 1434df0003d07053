"""Shared fixtures for the affordability calculator tests."""

import pytest

from home_afford.data_models import DEFAULT_PROFILE
from home_afford_web.app import create_app


@pytest.fixture
def default_input():
    return DEFAULT_PROFILE


@pytest.fixture
def app():
    return create_app({"TESTING": True, "LOG_LEVEL": "WARNING"})


@pytest.fixture
def client(app):
    return app.test_client()
