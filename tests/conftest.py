from __future__ import annotations

import pytest

from score_engine.config.runtime import reset_cache


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; re-read the environment for each test."""
    reset_cache()
    yield
    reset_cache()
