"""
Main toolpath processor interface.
This is the primary entry point for turning G-code text into draw segments.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from core.geometry import DrawSegment, Point2
from core.interpreter import MotionInterpreter
from core.lexer import GCodeLexer
from core.parser import CommandRecord, GCodeParser
from core.statistics import SegmentCollection
from core.view import ViewTransform
from utils.errors import ErrorCollector, GCodeError, InvalidParameterError, RenderSurfaceError
from utils.validation import parse_display_z

logger = logging.getLogger(__name__)


class ToolpathProcessor:
    """
    Main interface for toolpath processing.
    Holds the viewer parameters (display Z, travel toggle) and reruns the
    whole program on every redraw.

    A rendering backend is any object with `is_ready() -> bool` and
    `render(segments, transform)`.
    """

    def __init__(self, display_z: float = 0.0, draw_travel_moves: bool = True):
        self.error_collector = ErrorCollector()
        self.lexer = GCodeLexer(self.error_collector)
        self.parser = GCodeParser(self.error_collector)
        self.interpreter = MotionInterpreter(self.error_collector)
        self.collection = SegmentCollection()

        self.display_z = display_z
        self.draw_travel_moves = draw_travel_moves

        self._last_processed_text = ""
        self.commands: List[CommandRecord] = []

    # Viewer parameters

    def set_display_z(self, text) -> bool:
        """
        Update the selected Z layer from UI input.

        Returns:
            True if accepted; on rejection the previous layer is kept
        """
        try:
            self.display_z = parse_display_z(text)
        except InvalidParameterError as e:
            logger.warning("Rejected Z layer: %s", e)
            return False
        return True

    def clamp_display_z(self, low: float, high: float) -> bool:
        """
        Pull the selected layer into [low, high], e.g. the program's layer range.

        Returns:
            True if the layer had to move
        """
        clamped = min(max(self.display_z, low), high)
        if clamped == self.display_z:
            return False
        logger.info("Z layer %g outside %g..%g, using %g", self.display_z, low, high, clamped)
        self.display_z = clamped
        return True

    def set_draw_travel_moves(self, enabled: bool):
        self.draw_travel_moves = bool(enabled)

    # Processing

    def process(self, gcode_text: str) -> List[DrawSegment]:
        """
        Run one full pass over the text.

        Args:
            gcode_text: Raw G-code text to process

        Returns:
            Draw segments in program order, visibility already resolved
        """
        self._last_processed_text = gcode_text
        self.error_collector.clear()
        self.collection.clear()

        tokens = self.lexer.tokenize(gcode_text)
        self.commands = self.parser.parse(tokens)

        for segment in self.interpreter.interpret(self.commands, self.display_z,
                                                  self.draw_travel_moves):
            self.collection.add(segment)

        logger.info("Processed %d commands into %d segments (%d visible) at Z=%g",
                    len(self.commands), len(self.collection.segments),
                    len(self.collection.visible_segments()), self.display_z)
        return self.collection.segments.copy()

    def redraw(self, gcode_text: str, transform: ViewTransform, backend) -> List[DrawSegment]:
        """
        Process the text and hand the result to a rendering backend.

        Raises:
            RenderSurfaceError: if the backend is missing or not ready; nothing
                is interpreted or drawn in that case
        """
        if backend is None or not backend.is_ready():
            raise RenderSurfaceError("Rendering surface is not available")

        segments = self.process(gcode_text)
        backend.render(segments, transform)
        return segments

    # Error handling methods for editor integration

    def get_errors_for_line(self, line_number: int) -> List[GCodeError]:
        return self.error_collector.get_errors_for_line(line_number)

    def get_all_errors(self) -> List[GCodeError]:
        """Get all errors and warnings from the last pass."""
        return self.error_collector.get_all_errors()

    def has_errors(self) -> bool:
        """Check if there are any errors (excluding warnings)."""
        return self.error_collector.has_errors()

    # Geometry methods

    def get_all_segments(self) -> List[DrawSegment]:
        return self.collection.segments.copy()

    def get_segments_for_line(self, line_number: int) -> List[DrawSegment]:
        return self.collection.get_segments_for_line(line_number)

    def get_bounding_box(self) -> Optional[Tuple[Point2, Point2]]:
        """Bounding box of the visible segments, or None."""
        return self.collection.get_bounding_box()

    def get_statistics(self) -> Dict[str, Any]:
        """Get processing and toolpath statistics."""
        return {
            'processing': {
                'total_lines': len(self._last_processed_text.split('\n')),
                'total_commands': len(self.commands),
                'commands_interpreted': self.interpreter.commands_processed,
                'dropped_arcs': self.interpreter.dropped_arcs,
                'errors': len(self.error_collector.errors),
                'warnings': self.error_collector.warning_count(),
            },
            'geometry': self.collection.get_statistics(),
            'machine_state': self.interpreter.machine_state.get_state_summary(),
            'display_z': self.display_z,
            'draw_travel_moves': self.draw_travel_moves,
        }

    def get_last_processed_text(self) -> str:
        return self._last_processed_text

    def reset(self):
        """Reset processor to initial state; viewer parameters are kept."""
        self.error_collector.clear()
        self.collection.clear()
        self.commands = []
        self._last_processed_text = ""
