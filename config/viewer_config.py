"""
Display configuration for the toolpath viewer.
Simple presets for colours, strokes and navigation feel.
"""
import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, Tuple

from core.geometry import ColorTag
from core.view import WHEEL_DIVISOR, ZOOM_STEP

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float]


@dataclass
class ViewerConfig:
    """Configuration for how segments are drawn."""
    name: str

    # RGB in 0..1, keyed by ColorTag value
    colors: Dict[str, Color] = field(default_factory=dict)
    background: Color = (1.0, 1.0, 1.0)

    # Origin crosshair
    crosshair_color: Color = (0.5, 0.5, 0.5)
    crosshair_dash: Tuple[int, int] = (3, 2)  # on/off pixels

    line_width: float = 1.0  # pixels, constant at every zoom
    arc_step_degrees: float = 5.0

    # Navigation
    zoom_step: float = ZOOM_STEP
    wheel_divisor: float = WHEEL_DIVISOR

    def color_for(self, tag: ColorTag) -> Color:
        return self.colors.get(tag.value, (0.0, 0.0, 0.0))


class ConfigManager:
    """Manages viewer configurations with simple presets."""

    @staticmethod
    def light() -> ViewerConfig:
        """White canvas: black extrusion, green travel, red retraction."""
        return ViewerConfig(
            name="Light",
            colors={
                ColorTag.EXTRUDE.value: (0.0, 0.0, 0.0),
                ColorTag.TRAVEL.value: (0.0, 0.5, 0.0),
                ColorTag.RETRACT.value: (1.0, 0.0, 0.0),
            },
        )

    @staticmethod
    def dark() -> ViewerConfig:
        """Dark canvas for long sessions."""
        return ViewerConfig(
            name="Dark",
            colors={
                ColorTag.EXTRUDE.value: (0.2, 0.5, 1.0),
                ColorTag.TRAVEL.value: (0.0, 0.8, 0.2),
                ColorTag.RETRACT.value: (1.0, 0.3, 0.3),
            },
            background=(0.1, 0.1, 0.15),
            crosshair_color=(0.35, 0.35, 0.35),
            line_width=1.5,
        )

    @staticmethod
    def get_config(preset: str) -> ViewerConfig:
        """Get configuration by preset name; unknown names give the light preset."""
        configs = {
            "light": ConfigManager.light,
            "dark": ConfigManager.dark,
        }
        return configs.get(preset.lower(), ConfigManager.light)()

    @staticmethod
    def preset_names():
        return ["light", "dark"]

    @staticmethod
    def save_config(config: ViewerConfig, filepath: str):
        """Save configuration to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(asdict(config), f, indent=2)

    @staticmethod
    def load_config(filepath: str) -> ViewerConfig:
        """Load configuration from JSON file, falling back to the light preset."""
        try:
            with open(filepath, 'r') as f:
                data = json.load(f)

            # JSON has no tuples
            data["colors"] = {k: tuple(v) for k, v in data.get("colors", {}).items()}
            for key in ("background", "crosshair_color", "crosshair_dash"):
                if key in data:
                    data[key] = tuple(data[key])

            return ViewerConfig(**data)

        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load viewer config %s: %s", filepath, e)
            return ConfigManager.light()
