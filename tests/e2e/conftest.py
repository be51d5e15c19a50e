from __future__ import annotations

import pytest

from privilee_map_tests.config import SuiteConfig, load_config
from privilee_map_tests.factory import session_factory
from privilee_map_tests.lifecycle import scenario_session
from privilee_map_tests.pages.map_page import MapPage


@pytest.fixture(scope="session")
def suite_config() -> SuiteConfig:
    return load_config()


@pytest.fixture
def map_page(suite_config: SuiteConfig):
    """A page bound to a fresh browser session, released after the test."""

    with scenario_session(session_factory(suite_config)) as session:
        yield MapPage(session)
