"""
Smoke tests for configuration loading and validation.
"""

import pytest

from main import load_config, validate_config
from models.config import Config, EngineConfig, ProvidersConfig, WebXRConfig


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_passes(self, valid_config):
        """A complete valid config passes validation."""
        is_valid, error = validate_config(valid_config)

        assert is_valid is True
        assert error is None

    @pytest.mark.parametrize("section", ["engine", "providers", "log_path", "log_level"])
    def test_missing_section(self, valid_config, section):
        del valid_config[section]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert section in error

    def test_unknown_provider(self, valid_config):
        valid_config["providers"]["enabled"] = ["webxr", "arcore"]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "arcore" in error

    def test_duplicate_provider(self, valid_config):
        valid_config["providers"]["enabled"] = ["webxr", "webxr"]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "twice" in error

    def test_xr8_requires_token(self, valid_config):
        del valid_config["providers"]["xr8"]["api_token"]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "providers.xr8.api_token" in error

    def test_xr8_token_not_needed_when_disabled(self, valid_config):
        valid_config["providers"]["enabled"] = ["webxr"]
        del valid_config["providers"]["xr8"]["api_token"]

        is_valid, _ = validate_config(valid_config)

        assert is_valid is True

    def test_unknown_sdk_backend(self, valid_config):
        valid_config["providers"]["zappar"]["sdk"] = "native"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "providers.zappar.sdk" in error

    def test_negative_permission_delay(self, valid_config):
        valid_config["engine"]["permission_delay_s"] = -1

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "permission_delay_s" in error

    def test_webxr_features_must_be_strings(self, valid_config):
        valid_config["providers"]["webxr"]["required_features"] = "local"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "providers.webxr.required_features" in error

    @pytest.mark.parametrize("port", [0, 70000, "5000", True])
    def test_invalid_port(self, valid_config, port):
        valid_config["web"]["port"] = port

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "web.port" in error

    def test_invalid_log_level(self, valid_config):
        valid_config["log_level"] = "VERBOSE"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "log_level" in error


class TestLoadConfig:
    def test_defaults_only(self, temp_config_dir):
        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["providers"]["enabled"] == ["webxr"]
        assert config["log_level"] == "INFO"

    def test_local_overrides_merge(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("""
providers:
  enabled: [webxr, zappar]
web:
  port: 8080
""")
        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["providers"]["enabled"] == ["webxr", "zappar"]
        # Sibling keys survive the merge
        assert config["providers"]["webxr"]["required_features"] == ["local"]
        assert config["web"]["port"] == 8080
        assert config["web"]["host"] == "127.0.0.1"

    def test_explicit_path_applied_last(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("log_level: DEBUG\n")
        explicit = temp_config_dir / "staging.yaml"
        explicit.write_text("log_level: WARNING\n")

        config = load_config(str(explicit))

        assert config["log_level"] == "WARNING"

    def test_loaded_defaults_validate(self, temp_config_dir):
        config = load_config(str(temp_config_dir / "config.yaml"))
        assert validate_config(config) == (True, None)


class TestTypedConfig:
    def test_from_dict(self, valid_config):
        config = Config.from_dict(valid_config)

        assert config.engine.name == "main"
        assert config.providers.enabled == ["webxr", "xr8", "zappar"]
        assert config.providers.xr8.api_token == "test-token"
        assert config.web.port == 5000

    def test_defaults(self):
        config = Config.from_dict({})

        assert config.engine == EngineConfig()
        assert config.providers == ProvidersConfig()
        assert config.providers.webxr == WebXRConfig(["local"], ["local", "hit-test"])
        assert config.log_path == "logs/ar_tracking.log"

    def test_to_dict_round_trip(self, valid_config):
        config = Config.from_dict(valid_config)
        assert Config.from_dict(config.to_dict()) == config
