"""
Pytest configuration and shared fixtures for NativeToolchains tests.
"""

import pytest

# Import test fixtures to make them available to all tests
# ruff: noqa: F401
from tests.fixtures.toolkits import (
    workdir,
    empty_probe,
    android_ndk,
    osxcross,
)

from nativetoolchains.core.platform import clear_host_platform_cache


@pytest.fixture(autouse=True)
def _reset_host_platform_cache():
    """Host detection is cached per process; start every test fresh."""
    clear_host_platform_cache()
    yield
    clear_host_platform_cache()


@pytest.fixture
def diagnostics():
    """Collecting diagnostic sink; pass diagnostics.append as the sink."""
    return []
