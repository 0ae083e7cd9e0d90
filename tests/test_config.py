import json

import pytest

from auto_i18n.config import CONFIG_FILENAME, ConfigError, WrapConfig, load_config


def test_defaults_without_file(tmp_path):
    config = load_config(tmp_path)
    assert config == WrapConfig()
    assert config.function_name == "t"
    assert config.scripts == ["hangul"]


def test_file_overrides_defaults(tmp_path):
    (tmp_path / CONFIG_FILENAME).write_text(json.dumps({
        "function_name": "i18n",
        "scripts": ["hangul", "han"],
        "inject_hook": False,
    }), encoding="utf-8")
    config = load_config(tmp_path)
    assert config.function_name == "i18n"
    assert config.scripts == ["hangul", "han"]
    assert config.inject_hook is False
    assert config.hook_name == "useTranslation"


def test_explicit_missing_path_fails(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path, tmp_path / "nope.json")


def test_invalid_json_fails(tmp_path):
    (tmp_path / CONFIG_FILENAME).write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize("data", [
    {"unknown_key": 1},
    {"function_name": 5},
    {"scripts": "hangul"},
    {"extensions": [".tsx", 1]},
    [],
])
def test_invalid_values_fail(data):
    with pytest.raises(ConfigError):
        WrapConfig.from_dict(data)
