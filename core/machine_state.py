"""
Machine state for the motion interpreter.
Tracks position and positioning mode for one interpretation pass.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum

from core.geometry import Point2


class PositioningMode(Enum):
    ABSOLUTE = "G90"
    RELATIVE = "G91"


@dataclass
class Position:
    """Represents a position in XYZ space."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def xy(self) -> Point2:
        return Point2(self.x, self.y)

    def to_list(self) -> list:
        return [self.x, self.y, self.z]


class MachineState:
    """Position and modal state, owned by a single interpretation pass."""

    def __init__(self):
        self.position = Position()
        self.positioning_mode = PositioningMode.ABSOLUTE

    def is_absolute(self) -> bool:
        return self.positioning_mode == PositioningMode.ABSOLUTE

    def set_positioning_mode(self, mode: PositioningMode):
        self.positioning_mode = mode

    def resolve_axis(self, current: float, value: Optional[float]) -> float:
        """Apply one axis word to the current coordinate."""
        if value is None:
            return current
        if self.is_absolute():
            return value
        return current + value

    def resolve_xy(self, x: Optional[float], y: Optional[float]) -> Point2:
        """Target XY for a move; missing words keep the current coordinate."""
        return Point2(self.resolve_axis(self.position.x, x),
                      self.resolve_axis(self.position.y, y))

    def move_to(self, target: Point2):
        self.position.x = target.x
        self.position.y = target.y

    def get_state_summary(self) -> Dict[str, Any]:
        """Get a summary of the current machine state for debugging."""
        return {
            'position': self.position.to_list(),
            'positioning_mode': self.positioning_mode.value,
        }
