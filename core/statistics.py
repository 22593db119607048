"""
Toolpath statistics over the segments of one interpretation pass.
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.geometry import ArcSegment, ColorTag, DrawSegment, LineSegment, Point2, segment_bounds


class SegmentCollection:
    """Holds the segments of a pass and maintains line-to-segment mapping."""

    def __init__(self, segments: Sequence[DrawSegment] = ()):
        self.segments: List[DrawSegment] = []
        self.line_to_segments: Dict[int, List[int]] = {}
        for segment in segments:
            self.add(segment)

    def add(self, segment: DrawSegment):
        self.line_to_segments.setdefault(segment.line_number, []).append(len(self.segments))
        self.segments.append(segment)

    def get_segments_for_line(self, line_number: int) -> List[DrawSegment]:
        return [self.segments[i] for i in self.line_to_segments.get(line_number, [])]

    def get_segments_by_color(self, color: ColorTag) -> List[DrawSegment]:
        return [seg for seg in self.segments if seg.color == color]

    def visible_segments(self) -> List[DrawSegment]:
        return [seg for seg in self.segments if seg.visible]

    def get_bounding_box(self, visible_only: bool = True) -> Optional[Tuple[Point2, Point2]]:
        """Bounding box as (min, max), or None when there is nothing to bound."""
        segments = self.visible_segments() if visible_only else self.segments
        if not segments:
            return None

        min_x = min_y = float('inf')
        max_x = max_y = float('-inf')
        for segment in segments:
            low, high = segment_bounds(segment)
            min_x = min(min_x, low.x)
            min_y = min(min_y, low.y)
            max_x = max(max_x, high.x)
            max_y = max(max_y, high.y)

        return Point2(min_x, min_y), Point2(max_x, max_y)

    def get_statistics(self) -> Dict[str, Any]:
        """Get toolpath statistics."""
        visible = self.visible_segments()
        return {
            'total_segments': len(self.segments),
            'visible_segments': len(visible),
            'line_segments': len([s for s in self.segments if isinstance(s, LineSegment)]),
            'arc_segments': len([s for s in self.segments if isinstance(s, ArcSegment)]),
            'travel_segments': len(self.get_segments_by_color(ColorTag.TRAVEL)),
            'extrude_segments': len(self.get_segments_by_color(ColorTag.EXTRUDE)),
            'retract_segments': len(self.get_segments_by_color(ColorTag.RETRACT)),
            'total_length': sum(s.length() for s in self.segments),
            'visible_length': sum(s.length() for s in visible),
            'layers': sorted({round(s.z, 6) for s in self.segments}),
            'lines_with_geometry': len(self.line_to_segments),
        }

    def clear(self):
        self.segments.clear()
        self.line_to_segments.clear()
