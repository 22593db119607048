"""Viewer configuration preset and persistence tests."""
from config.viewer_config import ConfigManager, ViewerConfig
from core.geometry import ColorTag


def test_light_preset_colours():
    config = ConfigManager.light()

    assert config.color_for(ColorTag.EXTRUDE) == (0.0, 0.0, 0.0)
    assert config.color_for(ColorTag.RETRACT) == (1.0, 0.0, 0.0)
    assert config.crosshair_dash == (3, 2)
    assert config.zoom_step == 1.1
    assert config.wheel_divisor == 40.0


def test_get_config_by_name():
    assert ConfigManager.get_config("Dark").name == "Dark"
    assert ConfigManager.get_config("unknown").name == "Light"
    assert ConfigManager.preset_names() == ["light", "dark"]


def test_missing_colour_falls_back_to_black():
    assert ViewerConfig(name="empty").color_for(ColorTag.TRAVEL) == (0.0, 0.0, 0.0)


def test_save_and_load(tmp_path):
    path = tmp_path / "viewer.json"
    config = ConfigManager.dark()
    config.line_width = 3.0

    ConfigManager.save_config(config, str(path))
    loaded = ConfigManager.load_config(str(path))

    assert loaded == config


def test_load_missing_file_gives_light_preset(tmp_path):
    loaded = ConfigManager.load_config(str(tmp_path / "missing.json"))
    assert loaded == ConfigManager.light()


def test_load_malformed_file_gives_light_preset(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    assert ConfigManager.load_config(str(path)).name == "Light"


def test_load_wrongly_shaped_colours_gives_light_preset(tmp_path):
    path = tmp_path / "shaped.json"
    path.write_text('{"name": "x", "colors": [1, 2]}')

    assert ConfigManager.load_config(str(path)) == ConfigManager.light()
