# config.py
import json
import math
from pathlib import Path

from .gameobjects.surface import DEFAULT_U_STEP, DEFAULT_Z_SCALE

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent / "settings.json"


def _floats(value, size: int, key: str) -> tuple:
    if not isinstance(value, (list, tuple)) or len(value) != size:
        raise ValueError(f"{key} must be a list of {size} numbers, got {value!r}")
    result = tuple(float(v) for v in value)
    if not all(math.isfinite(v) for v in result):
        raise ValueError(f"{key} must contain finite numbers, got {value!r}")
    return result


def _section(data: dict, key: str) -> dict:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"{key} must be a JSON object, got {section!r}")
    return section


class Settings:
    def __init__(
        self,
        width: int = 800,
        height: int = 800,
        title: str = "Kiss Surface",
        u_step: float = DEFAULT_U_STEP,
        z_scale: int = DEFAULT_Z_SCALE,
        color=(1.0, 0.85, 0.3, 1.0),
        light_position=(2.0, 2.0, 0.0),
    ):
        """
        Viewer settings.

        :param width: Window width in pixels
        :param height: Window height in pixels
        :param title: Window caption prefix
        :param u_step: Angular mesh step in degrees
        :param z_scale: Mesh z resolution (steps per unit)
        :param color: Surface RGBA color
        :param light_position: Initial point light position
        """
        if not all(math.isfinite(float(v)) for v in (width, height, u_step, z_scale)):
            raise ValueError("window and surface values must be finite numbers")
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"window size must be positive, got {width}x{height}")
        if float(u_step) <= 0:
            raise ValueError(f"surface.u_step must be positive, got {u_step}")
        if int(z_scale) != z_scale or int(z_scale) < 1:
            raise ValueError(f"surface.z_scale must be a positive integer, got {z_scale}")

        self.width = int(width)
        self.height = int(height)
        self.title = str(title)
        self.u_step = float(u_step)
        self.z_scale = int(z_scale)
        self.color = _floats(color, 4, "surface.color")
        self.light_position = _floats(light_position, 3, "light.position")

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        if not isinstance(data, dict):
            raise ValueError(f"settings must be a JSON object, got {type(data).__name__}")
        window = _section(data, "window")
        surface = _section(data, "surface")
        light = _section(data, "light")

        defaults = cls()
        return cls(
            width=window.get("width", defaults.width),
            height=window.get("height", defaults.height),
            title=window.get("title", defaults.title),
            u_step=surface.get("u_step", defaults.u_step),
            z_scale=surface.get("z_scale", defaults.z_scale),
            color=surface.get("color", defaults.color),
            light_position=light.get("position", defaults.light_position),
        )


def load_settings(path=None) -> Settings:
    """
    Read viewer settings from a JSON file.

    :param path: Settings file; the bundled settings.json when omitted
    :raises FileNotFoundError: If the file does not exist
    :raises ValueError: If a value is out of range
    """
    path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return Settings.from_dict(data)
