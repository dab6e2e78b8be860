"""
Unit tests for the ConfigManager class in the NetUsageChart application.
"""
import pytest
from unittest.mock import patch, mock_open
import json
from pathlib import Path
from netusagechart import constants
from netusagechart.utils.config import ConfigError, ConfigManager

@pytest.fixture
def config_manager(tmp_path):
    config_path = tmp_path / "netusagechart_test.json"
    return ConfigManager(config_path)

def test_load_creates_default_config_if_missing(config_manager):
    with patch.object(Path, "exists", return_value=False):
        with patch.object(config_manager, "save") as mock_save:
            config = config_manager.load()
            mock_save.assert_called_once()
            assert mock_save.call_args[0][0] == constants.config.defaults.DEFAULT_CONFIG
            assert config == constants.config.defaults.DEFAULT_CONFIG

def test_load_valid_config_merges_with_defaults(config_manager):
    mock_content = json.dumps({"update_rate": 0.5, "visible_days": 14})
    with patch.object(Path, "exists", return_value=True):
        with patch.object(Path, "open", mock_open(read_data=mock_content)):
            config = config_manager.load()
    assert config["update_rate"] == 0.5
    assert config["visible_days"] == 14
    assert config["fill_color"] == constants.config.defaults.DEFAULT_CONFIG["fill_color"]

def test_load_drops_unknown_keys(config_manager):
    config_manager.config_path.write_text(json.dumps({"font_size": 10}), encoding="utf-8")
    with patch.object(config_manager.logger, 'warning') as mock_warning:
        config = config_manager.load()
    assert "font_size" not in config
    mock_warning.assert_called_once()

def test_load_backs_up_corrupt_file(config_manager):
    config_manager.config_path.write_text("{not json", encoding="utf-8")
    config = config_manager.load()
    assert config == constants.config.defaults.DEFAULT_CONFIG
    assert config_manager.config_path.with_name(f"{config_manager.config_path.name}.corrupt").exists()
    assert json.loads(config_manager.config_path.read_text(encoding="utf-8")) == config

def test_load_non_object_root_uses_defaults(config_manager):
    config_manager.config_path.write_text("[1, 2, 3]", encoding="utf-8")
    assert config_manager.load() == constants.config.defaults.DEFAULT_CONFIG

def test_load_os_error_raises_config_error(config_manager):
    with patch.object(Path, "exists", return_value=True):
        with patch.object(Path, "open", side_effect=PermissionError("denied")):
            with pytest.raises(ConfigError):
                config_manager.load()

def test_save_writes_atomically_and_skips_unchanged(config_manager):
    config = constants.config.defaults.DEFAULT_CONFIG.copy()
    config["visible_days"] = 7
    config_manager.save(config)
    assert json.loads(config_manager.config_path.read_text(encoding="utf-8"))["visible_days"] == 7

    with patch("shutil.move") as mock_move:
        config_manager.save(config)
        mock_move.assert_not_called()

def test_save_os_error_raises_config_error(config_manager):
    with patch("tempfile.NamedTemporaryFile", side_effect=OSError("disk full")):
        with pytest.raises(ConfigError):
            config_manager.save(constants.config.defaults.DEFAULT_CONFIG.copy())

def test_validate_config_corrects_invalid_values(config_manager):
    invalid_config = {
        "update_rate": -1,
        "stroke_color": "not-a-hex-code",
        "estimate_visible": "not-a-boolean",
        "selected_interfaces": "not-a-list",
        "bucket_duration_minutes": True,
        "interface_mode": "some",
    }
    with patch.object(config_manager.logger, 'warning'):
        validated_config = config_manager._validate_config(invalid_config)

    defaults = constants.config.defaults
    assert validated_config["update_rate"] == defaults.DEFAULT_UPDATE_RATE
    assert validated_config["stroke_color"] == defaults.DEFAULT_CONFIG["stroke_color"]
    assert validated_config["estimate_visible"] == defaults.DEFAULT_ESTIMATE_VISIBLE
    assert validated_config["selected_interfaces"] == []
    assert validated_config["bucket_duration_minutes"] == defaults.DEFAULT_BUCKET_DURATION_MINUTES
    assert validated_config["interface_mode"] == defaults.DEFAULT_INTERFACE_MODE

def test_validate_config_normalizes_values(config_manager):
    validated_config = config_manager._validate_config({
        "bucket_duration_minutes": "15",
        "interface_mode": "SELECTED",
        "selected_interfaces": ["eth0"],
    })
    assert validated_config["bucket_duration_minutes"] == 15
    assert validated_config["interface_mode"] == "selected"
    assert validated_config["selected_interfaces"] == ["eth0"]

@pytest.mark.parametrize("key, value", [
    ("visible_days", 0),
    ("visible_days", 366),
    ("retention_days", 1000),
    ("bucket_duration_minutes", 2000),
    ("stroke_width", 0.1),
])
def test_validate_config_rejects_out_of_range(config_manager, key, value):
    with patch.object(config_manager.logger, 'warning'):
        validated_config = config_manager._validate_config({key: value})
    assert validated_config[key] == constants.config.defaults.DEFAULT_CONFIG[key]
