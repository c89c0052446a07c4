from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from configs.settings import Settings
from runtime.context import build_context


@pytest.fixture()
def settings(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("EASLY_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("EASLY_SESSIONS_PATH", raising=False)
    monkeypatch.delenv("EASLY_SESSIONS_HYDRATE", raising=False)
    monkeypatch.delenv("CHROMA_URL", raising=False)
    monkeypatch.delenv("CHROMA_COLLECTION", raising=False)
    return Settings()


@pytest.fixture()
def context(settings: Settings):
    ctx = build_context(settings)
    yield ctx
    ctx.close()


@pytest.fixture()
def client(context):
    from runtime.api.server import create_app

    app = create_app(context)
    with TestClient(app) as test_client:
        yield test_client
