import copy

import pytest

from tondex_paths.core import config as tondex_config
from tondex_paths.testing.chain import fake_chain  # noqa: F401


def pytest_configure(config):
    config.addinivalue_line("markers", "smoke: mark test as a smoke test")
    config.addinivalue_line("markers", "integration: mark test as integration")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "smoke" in item.nodeid:
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(autouse=True)
def isolated_config():
    """Run every test against an empty CONFIG.

    Contracts read gas overrides from config at construction, so a local
    config.json would otherwise change payload values under test.
    """
    original = copy.deepcopy(tondex_config.CONFIG)
    tondex_config.set_config({})
    yield tondex_config.CONFIG
    tondex_config.set_config(original)
