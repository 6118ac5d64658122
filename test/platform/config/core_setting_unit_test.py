"""Unit tests for Settings parsing from env files and the process environment."""

from pathlib import Path

import pytest

from src.platform.config.core_setting import Settings


_REPO_ROOT = Path(__file__).resolve().parents[3]


@pytest.mark.unit
class TestCorsOrigins:
    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch) -> None:
        monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)

    def test_comma_list_from_env_file(self, tmp_path) -> None:
        env_file = tmp_path / '.env'
        env_file.write_text('BACKEND_CORS_ORIGINS=http://a.com, http://b.com\n')

        settings = Settings(_env_file=env_file)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.com', 'http://b.com']

    def test_comma_list_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', 'http://a.com,http://b.com')

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.com', 'http://b.com']

    def test_json_list_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["http://a.com", "http://b.com"]')

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.com', 'http://b.com']

    def test_shipped_example_env_file_loads(self) -> None:
        settings = Settings(_env_file=_REPO_ROOT / '.env.example')  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://localhost:3000']
