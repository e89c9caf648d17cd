from collections.abc import Iterator

import pytest

from periodalgebra.settings import get_settings


@pytest.fixture
def fresh_settings() -> Iterator[None]:
    """Reload settings from the (monkeypatched) environment for one test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
