# Tests for config.py settings and the homeboard CLI.
# Created: 2026-10-11

import pytest

from homeboard.config import Settings, get_config_dir
from homeboard.security.pin import verify_pin


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("HOMEBOARD_PIN_MAX_ATTEMPTS", "HOMEBOARD_PIN_LOCKOUT_MINUTES"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.pin_max_attempts == 5
        assert settings.pin_lockout_seconds == 900

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("HOMEBOARD_PIN_MAX_ATTEMPTS", "3")
        monkeypatch.setenv("HOMEBOARD_PIN_LOCKOUT_MINUTES", "2")
        settings = Settings(_env_file=None)
        assert settings.pin_max_attempts == 3
        assert settings.pin_lockout_seconds == 120

    def test_config_dir_created(self, tmp_path):
        target = tmp_path / "nested" / "data"
        assert get_config_dir(Settings(_env_file=None, data_dir=target)) == target
        assert target.is_dir()


class TestCLI:
    def test_hash_pin(self, capsys):
        from homeboard.__main__ import main

        main(["hash-pin", "1234"])
        printed = capsys.readouterr().out.strip()
        assert verify_pin("1234", printed)

    def test_hash_pin_requires_value(self):
        from homeboard.__main__ import main

        with pytest.raises(SystemExit):
            main(["hash-pin"])

    def test_serve_uses_settings(self, monkeypatch):
        from homeboard.__main__ import main

        calls = []
        monkeypatch.setattr(
            "homeboard.api.serve.run_api_server",
            lambda **kwargs: calls.append(kwargs),
        )
        main(["serve", "--port", "9000"])
        assert calls[0]["port"] == 9000
        assert calls[0]["dev"] is False
