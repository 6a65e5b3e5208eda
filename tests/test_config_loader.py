import json

import pytest

from config.config_loader import DEFAULT_CONFIG, load_config, validate_config


def write_config(path, overrides):
    path.write_text(json.dumps(overrides), encoding="utf-8")
    return str(path)


def test_defaults_are_valid():
    validate_config(DEFAULT_CONFIG.copy())


def test_load_merges_overrides(tmp_path, capsys):
    output_dir = tmp_path / "out"
    path = write_config(tmp_path / "runtime_config.json", {
        "zero": "0",
        "init_margin": 4,
        "output_directory": str(output_dir)
    })
    config = load_config(path)
    assert config["zero"] == "0"
    assert config["init_margin"] == 4
    assert config["max_steps"] == DEFAULT_CONFIG["max_steps"]
    assert output_dir.is_dir()
    out = capsys.readouterr().out
    assert "Loaded config:" in out
    assert "init_margin: 4" in out


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))


def test_missing_key():
    config = DEFAULT_CONFIG.copy()
    del config["max_steps"]
    with pytest.raises(ValueError):
        validate_config(config)


@pytest.mark.parametrize("key, value", [
    ("init_margin", "2"),
    ("max_steps", True),
    ("trace_enabled", 1),
    ("zero", 0),
])
def test_wrong_types(key, value):
    config = DEFAULT_CONFIG.copy()
    config[key] = value
    with pytest.raises(TypeError):
        validate_config(config)


@pytest.mark.parametrize("key, value", [
    ("init_margin", -1),
    ("max_steps", 0),
    ("log_frequency", 0),
    ("zero", ""),
    ("zero", "__"),
])
def test_out_of_range_values(key, value):
    config = DEFAULT_CONFIG.copy()
    config[key] = value
    with pytest.raises(ValueError):
        validate_config(config)
