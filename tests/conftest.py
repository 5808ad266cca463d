"""
Pytest configuration and shared fixtures for token_lineage tests.
"""

import logging

import pytest

from token_lineage.config import get_settings
from token_lineage.detection.batch import TokenDescriptor


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are lru_cached; drop them so monkeypatched env vars take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_package_logger():
    """CLI tests reconfigure the package logger; put it back for caplog."""
    pkg_logger = logging.getLogger("token_lineage")
    handlers, level, propagate = pkg_logger.handlers[:], pkg_logger.level, pkg_logger.propagate
    yield
    pkg_logger.handlers = handlers
    pkg_logger.setLevel(level)
    pkg_logger.propagate = propagate


@pytest.fixture
def runners():
    """Three established runners, in market-cap order."""
    return [
        TokenDescriptor(name="Pepe", symbol="PEPE", id="r-pepe", market_cap=4_000_000_000),
        TokenDescriptor(name="Dogwifhat", symbol="WIF", id="r-wif", market_cap=2_000_000_000),
        TokenDescriptor(name="Bonk", symbol="BONK", id="r-bonk", market_cap=1_500_000_000),
    ]


@pytest.fixture
def candidates():
    """Fresh launches: two obvious copies, one original and one leet copy."""
    return [
        TokenDescriptor(name="Baby Pepe", symbol="BABYPEPE", id="c-babypepe"),
        TokenDescriptor(name="Bonk Inu", symbol="BONKINU", id="c-bonkinu"),
        TokenDescriptor(name="Totally New", symbol="NEWT", id="c-newt"),
        TokenDescriptor(name="P3P3", symbol="P3P3", id="c-p3p3"),
    ]
