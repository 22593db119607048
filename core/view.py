"""
View transform handed to the rendering backend with each redraw.
"""
import math
from dataclasses import dataclass
from typing import Tuple

ZOOM_STEP = 1.1
WHEEL_DIVISOR = 40.0


@dataclass(frozen=True)
class ViewTransform:
    """Zoom factor and screen-space translation. Never feeds back into geometry."""
    zoom: float = 1.0
    translate: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        if not math.isfinite(self.zoom) or self.zoom <= 0:
            raise ValueError(f"zoom must be a positive number, got {self.zoom}")
        dx, dy = self.translate
        if not (math.isfinite(dx) and math.isfinite(dy)):
            raise ValueError(f"translate must be finite, got {self.translate}")
        object.__setattr__(self, 'translate', (float(dx), float(dy)))

    @classmethod
    def identity(cls) -> 'ViewTransform':
        return cls()

    def zoomed(self, wheel_delta: float, step: float = ZOOM_STEP,
               divisor: float = WHEEL_DIVISOR) -> 'ViewTransform':
        """Zoom for a wheel event; scrolling up (negative delta) zooms in."""
        clicks = wheel_delta / -divisor
        return ViewTransform(self.zoom * step ** clicks, self.translate)

    def panned(self, dx: float, dy: float) -> 'ViewTransform':
        """Offset the view by a screen-space drag delta."""
        return ViewTransform(self.zoom, (self.translate[0] + dx, self.translate[1] + dy))

    def line_width(self, pixels: float) -> float:
        """Model-space width that renders as `pixels` on screen."""
        return pixels / self.zoom
