"""
Draw segment types emitted by the motion interpreter, plus the arc helpers
the renderer and statistics share.
"""
import math
from dataclasses import dataclass
from typing import List, Tuple, Union
from enum import Enum


class ColorTag(Enum):
    TRAVEL = "travel"
    EXTRUDE = "extrude"
    RETRACT = "retract"


@dataclass(frozen=True)
class Point2:
    """Represents a 2D point in model space."""
    x: float
    y: float

    def distance_to(self, other: 'Point2') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class LineSegment:
    """A straight move between two points."""
    start: Point2
    end: Point2
    visible: bool
    color: ColorTag
    z: float = 0.0
    line_number: int = 0

    def length(self) -> float:
        return self.start.distance_to(self.end)


@dataclass(frozen=True)
class ArcSegment:
    """A circular move; angles are radians measured from the centre."""
    center: Point2
    radius: float
    start_angle: float
    end_angle: float
    clockwise: bool
    visible: bool
    color: ColorTag
    z: float = 0.0
    line_number: int = 0

    def sweep(self) -> float:
        return arc_sweep(self.start_angle, self.end_angle, self.clockwise)

    def length(self) -> float:
        return abs(self.sweep()) * self.radius

    def point_at(self, angle: float) -> Point2:
        return Point2(self.center.x + self.radius * math.cos(angle),
                      self.center.y + self.radius * math.sin(angle))


DrawSegment = Union[LineSegment, ArcSegment]


def arc_sweep(start_angle: float, end_angle: float, clockwise: bool) -> float:
    """
    Signed sweep from start_angle to end_angle in the given winding.

    Clockwise sweeps are negative. Coincident angles mean a full turn,
    which is how G-code writes a complete circle.
    """
    sweep = end_angle - start_angle
    if clockwise:
        if sweep >= 0:
            sweep -= 2 * math.pi
    else:
        if sweep <= 0:
            sweep += 2 * math.pi
    return sweep


def arc_points(segment: ArcSegment, max_step_degrees: float = 5.0) -> List[Point2]:
    """Tessellate an arc into a polyline, start and end points included."""
    sweep = segment.sweep()
    num_steps = max(8, int(math.ceil(abs(math.degrees(sweep)) / max_step_degrees)))
    return [segment.point_at(segment.start_angle + sweep * i / num_steps)
            for i in range(num_steps + 1)]


def segment_bounds(segment: DrawSegment) -> Tuple[Point2, Point2]:
    """Axis-aligned bounding box of a segment as (min, max)."""
    if isinstance(segment, LineSegment):
        points = [segment.start, segment.end]
    else:
        sweep = segment.sweep()
        points = [segment.point_at(segment.start_angle),
                  segment.point_at(segment.start_angle + sweep)]
        # Add every axis extreme (0, 90, 180, 270 degrees) the sweep passes
        for quarter in range(4):
            angle = quarter * math.pi / 2
            offset = (angle - segment.start_angle) % (2 * math.pi)
            if sweep < 0:
                offset = offset - 2 * math.pi if offset else 0.0
            if abs(offset) <= abs(sweep):
                points.append(segment.point_at(angle))

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return Point2(min(xs), min(ys)), Point2(max(xs), max(ys))
