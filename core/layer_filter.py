"""
Z layer visibility and colour classification for draw segments.
"""
from typing import Optional, Tuple

from core.geometry import ColorTag

# Half-width of the band around the selected layer that counts as "on layer"
LAYER_TOLERANCE = 0.1


def classify_move(e: Optional[float], draw_travel_moves: bool) -> Tuple[ColorTag, bool]:
    """
    Classify a move by its extrusion word.

    Returns:
        (color, base_draw_flag). Moves carrying E are always drawn;
        pure travel moves follow the travel toggle.
    """
    if e is None:
        return ColorTag.TRAVEL, draw_travel_moves
    if e < 0:
        return ColorTag.RETRACT, True
    return ColorTag.EXTRUDE, True


def is_visible(z: float, display_z: float, base_draw_flag: bool) -> bool:
    """Check whether a segment at height z is drawn on the selected layer."""
    return base_draw_flag and abs(z - display_z) <= LAYER_TOLERANCE
