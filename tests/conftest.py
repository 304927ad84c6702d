from __future__ import annotations

import pytest

_PROVIDER_ENV = (
    "OPENAI_API_KEY",
    "CLAUDE_API_KEY",
    "ANTHROPIC_API_KEY",
    "DEFAULT_MODEL",
    "OPENAI_BASE_URL",
    "ANTHROPIC_BASE_URL",
    "CORS_ALLOW_ORIGINS",
)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    # Never pick up a developer's real keys or .env file.
    monkeypatch.chdir(tmp_path)
    for name in _PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from threat_outlook.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from threat_outlook.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
