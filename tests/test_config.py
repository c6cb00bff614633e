"""Tests for settings — defaults, env overrides, validation."""

import pytest
from pydantic import ValidationError

from sleeponlan.config import Settings, get_settings


class TestDefaults:
    def test_defaults(self):
        s = Settings()
        assert s.host == "0.0.0.0"
        assert s.port == 10
        assert s.buffer_size == 1024
        assert s.suspend_command == ["systemctl", "suspend"]
        assert s.local_only is False
        assert s.is_dry_run is False

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestEnvironment:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SLEEPONLAN_PORT", "9")
        monkeypatch.setenv("SLEEPONLAN_MODE", "dev")
        monkeypatch.setenv("SLEEPONLAN_LOCAL_ONLY", "true")
        s = Settings()
        assert s.port == 9
        assert s.is_dry_run is True
        assert s.local_only is True

    def test_suspend_command_from_shell_string(self, monkeypatch):
        monkeypatch.setenv("SLEEPONLAN_SUSPEND_COMMAND", "loginctl suspend --no-wall")
        assert Settings().suspend_command == ["loginctl", "suspend", "--no-wall"]

    def test_suspend_command_from_json_list(self, monkeypatch):
        monkeypatch.setenv("SLEEPONLAN_SUSPEND_COMMAND", '["pm-suspend"]')
        assert Settings().suspend_command == ["pm-suspend"]

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("SLEEPONLAN_PORT=4343\n", encoding="utf-8")
        assert Settings().port == 4343

    def test_init_kwargs_beat_env(self, monkeypatch):
        monkeypatch.setenv("SLEEPONLAN_PORT", "9")
        assert Settings(port=11).port == 11


class TestValidation:
    @pytest.mark.parametrize("port", [-1, 65536])
    def test_port_out_of_range(self, port):
        with pytest.raises(ValidationError):
            Settings(port=port)

    def test_buffer_too_small_for_packet(self):
        with pytest.raises(ValidationError):
            Settings(buffer_size=101)

    def test_buffer_exactly_packet_size_rejected(self):
        # a 102-byte buffer would truncate longer datagrams into valid packets
        with pytest.raises(ValidationError):
            Settings(buffer_size=102)

    def test_buffer_one_byte_over_packet_size(self):
        assert Settings(buffer_size=103).buffer_size == 103

    def test_empty_suspend_command(self):
        with pytest.raises(ValidationError):
            Settings(suspend_command="")
