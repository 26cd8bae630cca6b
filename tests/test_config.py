"""Tests for configuration loading."""

import pytest

from fortune_score.config import (
    ExpressionConfig,
    FortuneConfig,
    IdentificationConfig,
    RemoteConfig,
    load_config,
)
from fortune_score.display import DisplayMode
from fortune_score.expression import OutOfRangeError
from fortune_score.models import Algorithm


def test_load_config_defaults():
    config = load_config()
    assert isinstance(config, FortuneConfig)
    assert config.algorithm is Algorithm.LINEAR
    assert config.remote.source == "random_org"
    assert config.remote.timeout_ms == 3000
    assert config.expression.base_digit == 6
    assert config.display_mode is DisplayMode.PLAIN
    assert not config.identification.enabled


def test_load_config_from_dict():
    config = load_config(
        {
            "algorithm": "gaussian",
            "identification": {"password": "secret"},
            "remote": {"api_key": "abc", "timeout_ms": 1500},
            "expression": {"base_digit": 3},
            "display": {"mode": "expression"},
        }
    )
    assert config.algorithm is Algorithm.GAUSSIAN
    assert config.identification.enabled
    assert config.remote.api_key == "abc"
    assert config.remote.timeout_ms == 1500
    assert config.expression.base_digit == 3
    assert config.display_mode is DisplayMode.EXPRESSION


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "fortune.yaml"
    path.write_text("algorithm: Remote\nremote:\n  api_key: from-file\n", encoding="utf-8")
    config = load_config(path)
    assert config.algorithm is Algorithm.REMOTE
    assert config.remote.api_key == "from-file"


def test_load_config_empty_yaml(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)).algorithm is Algorithm.LINEAR


def test_load_config_missing_file_uses_defaults(tmp_path):
    assert load_config(tmp_path / "missing.yaml").algorithm is Algorithm.LINEAR


def test_load_config_env_override(monkeypatch):
    monkeypatch.setenv("FORTUNE_ALGORITHM", "modulo")
    monkeypatch.setenv("FORTUNE_BASE_DIGIT", "9")
    monkeypatch.setenv("FORTUNE_RANDOM_ORG_API_KEY", "env-key")
    monkeypatch.setenv("FORTUNE_REMOTE_TIMEOUT_MS", "250")
    monkeypatch.setenv("FORTUNE_CODE_PASSWORD", "env-secret")
    monkeypatch.setenv("FORTUNE_DISPLAY_MODE", "hex")
    config = load_config()
    assert config.algorithm is Algorithm.MODULO
    assert config.expression.base_digit == 9
    assert config.remote.api_key == "env-key"
    assert config.remote.timeout_ms == 250
    assert config.identification.password == "env-secret"
    assert config.display_mode is DisplayMode.HEX


def test_load_config_env_overrides_dict(monkeypatch):
    monkeypatch.setenv("FORTUNE_ALGORITHM", "gaussian")
    config = load_config({"algorithm": "linear"})
    assert config.algorithm is Algorithm.GAUSSIAN


def test_unknown_algorithm_raises():
    with pytest.raises(ValueError, match="Unknown algorithm 'dice'"):
        load_config({"algorithm": "dice"})


def test_unknown_display_mode_raises():
    with pytest.raises(ValueError, match="Unknown display mode"):
        load_config({"display": {"mode": "roman"}})


def test_config_dataclass_defaults():
    config = FortuneConfig()
    assert config.identification == IdentificationConfig()
    assert config.remote == RemoteConfig()


class TestValidation:
    """Validation tests for the config dataclasses."""

    @pytest.mark.parametrize("base_digit", [0, 10, -1])
    def test_base_digit_out_of_range_raises(self, base_digit):
        with pytest.raises(OutOfRangeError, match=r"Base digit must be an integer in \[1, 9\]"):
            ExpressionConfig(base_digit=base_digit)

    @pytest.mark.parametrize("base_digit", [True, 3.0, "3"])
    def test_base_digit_must_be_int(self, base_digit):
        with pytest.raises(OutOfRangeError):
            ExpressionConfig(base_digit=base_digit)

    def test_base_digit_error_is_value_error(self):
        with pytest.raises(ValueError):
            ExpressionConfig(base_digit=0)

    def test_base_digit_from_dict_validated(self):
        with pytest.raises(OutOfRangeError, match="got 12"):
            load_config({"expression": {"base_digit": 12}})

    def test_zero_timeout_raises(self):
        with pytest.raises(ValueError, match="timeout_ms must be > 0"):
            RemoteConfig(timeout_ms=0)

    def test_empty_source_raises(self):
        with pytest.raises(ValueError, match="source must be a non-empty string"):
            RemoteConfig(source="")

    def test_remote_without_key_is_allowed(self):
        config = load_config({"algorithm": "remote"})
        assert config.remote.api_key == ""
