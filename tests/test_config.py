# Tests for config.py
# Created: 2026-10-19

from dribbble_oauth.config import Settings, get_config_dir, get_settings


class TestSettings:
    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.oauth_base_url == "https://dribbble.com"
        assert s.api_base_url == "https://api.dribbble.com/v1"
        assert s.request_timeout == 15.0
        assert s.form_json_content_type == "application/json"
        assert s.authorize_url == "https://dribbble.com/oauth/authorize"
        assert s.token_url == "https://dribbble.com/oauth/token"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("DRIBBBLE_CLIENT_ID", "env-id")
        monkeypatch.setenv("DRIBBBLE_REQUEST_TIMEOUT", "3.5")
        s = Settings(_env_file=None)
        assert s.client_id == "env-id"
        assert s.request_timeout == 3.5

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_get_config_dir_created(self, tmp_path):
        d = get_config_dir()
        assert d == tmp_path / "config"
        assert d.is_dir()
