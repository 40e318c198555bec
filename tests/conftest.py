from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("APP_ENV", "HOST", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from greeting_service.core.settings import get_settings

    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from greeting_service.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
