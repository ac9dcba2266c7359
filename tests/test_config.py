# Area: Shared Tests
"""Tests for configuration loading."""

import json
from unittest.mock import Mock

import pytest

from king_of_hearts import config as config_module
from king_of_hearts.config import DEFAULT_CONFIG, ROUND_LADDERS, load_config, normalize_ladders


@pytest.fixture
def no_dotenv(monkeypatch, clean_env):
    loader = Mock()
    monkeypatch.setattr(config_module, "load_dotenv", loader)
    return loader


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self, no_dotenv):
        config = load_config()
        assert config["batch_size"] == 2
        assert config["batch_delay_seconds"] == 0.5
        assert config["llm_timeout_seconds"] == 30.0
        assert config["mock_mode"] is False
        assert config["round_ladders"] == ROUND_LADDERS
        no_dotenv.assert_called_once()

    def test_json_file(self, no_dotenv, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "batch_size": 3,
            "round_ladders": {"1": [[0, [100, 200, 300, 400]]], "2": [[0, [500]]]},
        }))
        config = load_config(str(path))
        assert config["batch_size"] == 3
        assert config["round_ladders"][1] == [(0, (100, 200, 300, 400))]

    def test_missing_file_uses_defaults(self, no_dotenv, tmp_path):
        config = load_config(str(tmp_path / "nope.json"))
        assert config["model"] == DEFAULT_CONFIG["model"]

    def test_environment_wins(self, no_dotenv, monkeypatch, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"batch_size": 3}))
        monkeypatch.setenv("KOH_BATCH_SIZE", "5")
        monkeypatch.setenv("KOH_BATCH_DELAY_SECONDS", "0")
        monkeypatch.setenv("KOH_MOCK_MODE", "yes")
        config = load_config(str(path))
        assert config["batch_size"] == 5
        assert config["batch_delay_seconds"] == 0.0
        assert config["mock_mode"] is True

    def test_defaults_not_mutated(self, no_dotenv, monkeypatch):
        monkeypatch.setenv("KOH_BATCH_SIZE", "9")
        load_config()
        assert DEFAULT_CONFIG["batch_size"] == 2


class TestValidateConfig:
    """Tests for rejected configuration values."""

    @pytest.mark.parametrize("env, value", [
        ("KOH_BATCH_SIZE", "0"),
        ("KOH_BATCH_DELAY_SECONDS", "-1"),
        ("KOH_LLM_TIMEOUT_SECONDS", "0"),
    ])
    def test_out_of_range(self, no_dotenv, monkeypatch, env, value):
        monkeypatch.setenv(env, value)
        with pytest.raises(ValueError):
            load_config()

    @pytest.mark.parametrize("ladders", [
        {"1": [[0, [100, 200]]]},
        {"1": [[5, [100]]], "2": [[0, [500]]]},
        {"1": [[0, [300, 100]]], "2": [[0, [500]]]},
        {"1": [[0, [100, 200, 300, 400, 500]]], "2": [[0, [500]]]},
        {"1": [[0, []]], "2": [[0, [500]]]},
    ])
    def test_bad_ladders(self, no_dotenv, tmp_path, ladders):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"round_ladders": ladders}))
        with pytest.raises(ValueError):
            load_config(str(path))


class TestNormalizeLadders:
    """Tests for normalize_ladders()."""

    def test_string_keys_and_lists(self):
        assert normalize_ladders({"2": [[7, [500]], [0, [250, 500]]]}) == {
            2: [(7, (500,)), (0, (250, 500))],
        }
