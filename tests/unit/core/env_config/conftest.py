"""Fixtures for environment configuration tests."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """
    Изолировать тест от окружения: убрать API_CLIENT_* переменные
    и перейти в пустую директорию (без чужого .env).
    """
    for key in list(os.environ):
        if key.upper().startswith("API_CLIENT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
