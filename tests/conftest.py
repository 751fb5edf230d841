import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config environment before test modules import the domain."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _ordering_domain():
    """Initialize the ordering domain once per session."""
    from ordering.domain import ordering

    ordering.init()
    return ordering


@pytest.fixture(scope="session", autouse=True)
def setup_db(_ordering_domain):
    from ordering.utils.db import drop_db, setup_db

    setup_db(_ordering_domain)

    yield

    drop_db(_ordering_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_ordering_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _ordering_domain.domain_context()
    ctx.push()

    yield

    from ordering.config import reset_settings
    from ordering.reference.gateway import reset_gateway
    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    reset_gateway()
    reset_settings()
    ctx.pop()
