import json

import pytest

from kiss_surface.config import Settings, load_settings


def write(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_bundled_settings():
    settings = load_settings()
    assert settings.u_step == 0.5
    assert settings.z_scale == 500
    assert settings.width == settings.height
    assert len(settings.color) == 4
    assert len(settings.light_position) == 3


def test_missing_keys_use_defaults(tmp_path):
    settings = load_settings(write(tmp_path, {"surface": {"z_scale": 20}}))
    defaults = Settings()

    assert settings.z_scale == 20
    assert settings.u_step == defaults.u_step
    assert settings.title == defaults.title
    assert settings.light_position == defaults.light_position


def test_values_are_read(tmp_path):
    settings = load_settings(write(tmp_path, {
        "window": {"width": 640, "height": 480, "title": "Kiss"},
        "surface": {"u_step": 2, "z_scale": 50, "color": [0, 1, 0, 1]},
        "light": {"position": [1, 2, 3]},
    }))

    assert (settings.width, settings.height, settings.title) == (640, 480, "Kiss")
    assert settings.u_step == 2.0
    assert settings.color == (0.0, 1.0, 0.0, 1.0)
    assert settings.light_position == (1.0, 2.0, 3.0)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.json")


@pytest.mark.parametrize("data", [
    {"surface": {"u_step": 0}},
    {"surface": {"z_scale": 0}},
    {"surface": {"z_scale": 1.5}},
    {"surface": {"color": [1, 1, 1]}},
    {"light": {"position": [1, 2]}},
    {"window": {"width": -1}},
    {"surface": {"u_step": float("nan")}},
    {"surface": {"u_step": float("inf")}},
    {"surface": {"z_scale": float("inf")}},
    {"window": {"height": float("nan")}},
    {"window": "big"},
    {"light": [1, 2, 3]},
])
def test_invalid_values(tmp_path, data):
    with pytest.raises(ValueError):
        load_settings(write(tmp_path, data))


def test_null_sections_use_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text('{"window": null, "surface": null, "light": null}', encoding="utf-8")

    settings = load_settings(path)
    defaults = Settings()
    assert (settings.width, settings.z_scale) == (defaults.width, defaults.z_scale)


def test_non_object_settings(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_settings(path)
