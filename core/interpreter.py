"""
Motion interpreter that turns command records into draw segments.
"""
import logging
import math
from typing import Callable, Dict, Iterable, Iterator, Optional

from core.arc import resolve_arc
from core.geometry import ArcSegment, DrawSegment, LineSegment, Point2
from core.layer_filter import classify_move, is_visible
from core.machine_state import MachineState, PositioningMode
from core.parser import CommandRecord, Mnemonic
from utils.errors import ErrorCollector, ErrorType

logger = logging.getLogger(__name__)


class MotionInterpreter:
    """
    Walks command records in order, keeping position and positioning mode,
    and yields one draw segment per resolvable motion command.

    G0/G1 produce lines, G2/G3 produce arcs, G90/G91 switch positioning
    mode. Every other record is skipped. Each call to interpret() starts from
    a fresh MachineState at the origin, so passes never share state.
    """

    def __init__(self, error_collector: Optional[ErrorCollector] = None):
        self.error_collector = error_collector
        self.machine_state = MachineState()
        self.commands_processed = 0
        self.dropped_arcs = 0

        # G-code handler mapping
        self.handlers: Dict[int, Callable[[CommandRecord, float, bool], Optional[DrawSegment]]] = {
            0: self.handle_linear_move,
            1: self.handle_linear_move,
            2: self.handle_clockwise_arc,
            3: self.handle_counterclockwise_arc,
            90: self.handle_absolute_positioning,
            91: self.handle_relative_positioning,
        }

    def interpret(self, commands: Iterable[CommandRecord], display_z: float,
                  draw_travel_moves: bool) -> Iterator[DrawSegment]:
        """
        Interpret commands lazily.

        Args:
            commands: Command records in program order
            display_z: Selected Z layer; segments off this layer are hidden
            draw_travel_moves: Whether moves without E are drawn

        Yields:
            LineSegment or ArcSegment, in input order
        """
        self.machine_state = MachineState()
        self.commands_processed = 0
        self.dropped_arcs = 0

        for command in commands:
            handler = self._handler_for(command)
            if handler is None:
                continue
            self.commands_processed += 1
            segment = handler(command, display_z, draw_travel_moves)
            if segment is not None:
                yield segment

    def _handler_for(self, command: CommandRecord):
        # G90.1/G91.1 and friends are different commands from G90/G91
        if command.mnemonic != Mnemonic.GENERAL or command.minor_number != 0:
            return None
        return self.handlers.get(command.major_number)

    def handle_linear_move(self, command: CommandRecord, display_z: float,
                           draw_travel_moves: bool) -> LineSegment:
        """G0/G1 - straight move to X/Y, Z set directly."""
        state = self.machine_state
        color, draw = classify_move(command.value_for('e'), draw_travel_moves)

        z = command.value_for('z')
        if z is not None:
            state.position.z = z

        start = state.position.xy()
        end = state.resolve_xy(command.value_for('x'), command.value_for('y'))
        state.move_to(end)

        return LineSegment(
            start=start,
            end=end,
            visible=is_visible(state.position.z, display_z, draw),
            color=color,
            z=state.position.z,
            line_number=command.line_number,
        )

    def handle_clockwise_arc(self, command: CommandRecord, display_z: float,
                             draw_travel_moves: bool) -> Optional[ArcSegment]:
        """G2 - clockwise arc."""
        return self._handle_arc_motion(command, display_z, draw_travel_moves, clockwise=True)

    def handle_counterclockwise_arc(self, command: CommandRecord, display_z: float,
                                    draw_travel_moves: bool) -> Optional[ArcSegment]:
        """G3 - counter-clockwise arc."""
        return self._handle_arc_motion(command, display_z, draw_travel_moves, clockwise=False)

    def _handle_arc_motion(self, command: CommandRecord, display_z: float,
                           draw_travel_moves: bool, clockwise: bool) -> Optional[ArcSegment]:
        state = self.machine_state
        start = state.position.xy()

        x = command.value_for('x')
        y = command.value_for('y')
        end = state.resolve_xy(x, y) if x is not None and y is not None else None

        i = command.value_for('i')
        j = command.value_for('j')
        offset = (i or 0.0, j or 0.0) if i is not None or j is not None else None

        geometry = resolve_arc(start, end, offset, command.value_for('r'))
        if geometry is None:
            self._drop_arc(command)
            return None

        color, draw = classify_move(command.value_for('e'), draw_travel_moves)
        z = command.value_for('z')
        if z is not None:
            state.position.z = z

        center = geometry.center
        start_angle = math.atan2(start.y - center.y, start.x - center.x)
        end_angle = math.atan2(end.y - center.y, end.x - center.x)
        state.move_to(end)

        return ArcSegment(
            center=center,
            radius=geometry.radius,
            start_angle=start_angle,
            end_angle=end_angle,
            clockwise=clockwise,
            visible=is_visible(state.position.z, display_z, draw),
            color=color,
            z=state.position.z,
            line_number=command.line_number,
        )

    def handle_absolute_positioning(self, command: CommandRecord, display_z: float,
                                    draw_travel_moves: bool) -> None:
        """G90 - absolute positioning"""
        self.machine_state.set_positioning_mode(PositioningMode.ABSOLUTE)

    def handle_relative_positioning(self, command: CommandRecord, display_z: float,
                                    draw_travel_moves: bool) -> None:
        """G91 - relative positioning"""
        self.machine_state.set_positioning_mode(PositioningMode.RELATIVE)

    def _drop_arc(self, command: CommandRecord):
        self.dropped_arcs += 1
        logger.debug("Dropped arc on line %d: %s", command.line_number, command)
        if self.error_collector is not None:
            self.error_collector.add_warning(
                command.line_number,
                f"Arc skipped, cannot resolve centre: {command}",
                ErrorType.GEOMETRY, *command.span
            )


def interpret(commands: Iterable[CommandRecord], display_z: float,
              draw_travel_moves: bool) -> Iterator[DrawSegment]:
    """Interpret commands with a throwaway interpreter."""
    return MotionInterpreter().interpret(commands, display_z, draw_travel_moves)
