"""Processor facade tests: passes, viewer parameters and the rendering contract."""
import pytest

from core.geometry import ColorTag, Point2
from core.view import ViewTransform
from toolpath_processor import ToolpathProcessor
from utils.errors import RenderSurfaceError

SQUARE = """G21
G90
G1 Z0.2
G1 X10 Y0 E1
G1 X10 Y10 E2
G0 X0 Y10
G1 X0 Y0 E3
G1 E2.5 ; not a retraction, E is still positive
G1 E-1
"""


class FakeBackend:
    def __init__(self, ready=True):
        self.ready = ready
        self.calls = []

    def is_ready(self):
        return self.ready

    def render(self, segments, transform):
        self.calls.append((list(segments), transform))


@pytest.fixture
def processor():
    return ToolpathProcessor(display_z=0.2, draw_travel_moves=False)


def test_process_returns_segments_in_order(processor):
    segments = processor.process(SQUARE)

    assert [s.line_number for s in segments] == [3, 4, 5, 6, 7, 8, 9]
    assert segments[3].color == ColorTag.TRAVEL
    assert not segments[3].visible
    assert segments[-1].color == ColorTag.RETRACT


def test_repeated_passes_are_identical(processor):
    assert processor.process(SQUARE) == processor.process(SQUARE)


def test_display_z_changes_visibility(processor):
    processor.process(SQUARE)
    assert len(processor.collection.visible_segments()) == 5

    assert processor.set_display_z("5")
    processor.process(SQUARE)
    assert processor.collection.visible_segments() == []


def test_rejected_display_z_keeps_previous(processor):
    assert not processor.set_display_z("two")
    assert processor.display_z == 0.2
    assert not processor.set_display_z("")
    assert processor.display_z == 0.2


def test_travel_toggle(processor):
    processor.set_draw_travel_moves(True)
    segments = processor.process(SQUARE)
    assert segments[3].visible


def test_redraw_hands_segments_to_backend(processor):
    backend = FakeBackend()
    transform = ViewTransform(2.0, (3.0, 4.0))

    segments = processor.redraw(SQUARE, transform, backend)

    assert len(backend.calls) == 1
    rendered, used_transform = backend.calls[0]
    assert rendered == segments
    assert used_transform is transform


def test_redraw_without_ready_surface_fails(processor):
    with pytest.raises(RenderSurfaceError):
        processor.redraw(SQUARE, ViewTransform.identity(), FakeBackend(ready=False))
    with pytest.raises(RenderSurfaceError):
        processor.redraw(SQUARE, ViewTransform.identity(), None)
    assert processor.get_all_segments() == []


def test_segments_for_line(processor):
    processor.process(SQUARE)

    assert processor.get_segments_for_line(1) == []
    line_4 = processor.get_segments_for_line(4)
    assert len(line_4) == 1
    assert line_4[0].end == Point2(10, 0)


def test_bounding_box_covers_visible_segments(processor):
    processor.process(SQUARE)
    assert processor.get_bounding_box() == (Point2(0, 0), Point2(10, 10))

    processor.set_display_z(3)
    processor.process(SQUARE)
    assert processor.get_bounding_box() is None


def test_statistics(processor):
    processor.process(SQUARE + "G2 X5 Y5 R0\n")
    stats = processor.get_statistics()

    assert stats['processing']['total_commands'] == 10
    assert stats['processing']['dropped_arcs'] == 1
    assert stats['processing']['warnings'] == 1
    assert stats['processing']['errors'] == 0
    assert stats['geometry']['total_segments'] == 7
    assert stats['geometry']['extrude_segments'] == 4
    assert stats['geometry']['retract_segments'] == 1
    assert stats['geometry']['travel_segments'] == 2
    assert stats['geometry']['layers'] == [0.2]
    assert stats['machine_state']['position'] == [0.0, 0.0, 0.2]
    assert stats['display_z'] == 0.2


def test_syntax_errors_are_reported_per_line(processor):
    processor.process("G1 X1\nG1 X$2\n")

    assert processor.has_errors()
    assert processor.get_errors_for_line(2)
    assert processor.get_errors_for_line(1) == []


def test_reset_keeps_viewer_parameters(processor):
    processor.process(SQUARE)
    processor.reset()

    assert processor.get_all_segments() == []
    assert processor.get_last_processed_text() == ""
    assert processor.display_z == 0.2
    assert not processor.draw_travel_moves


def test_clamp_display_z_into_layer_range():
    processor = ToolpathProcessor(display_z=0.0)

    assert processor.clamp_display_z(0.2, 1.0)
    assert processor.display_z == 0.2
    assert not processor.clamp_display_z(0.2, 1.0)
    assert processor.clamp_display_z(-1.0, 0.1)
    assert processor.display_z == 0.1


def test_clamped_layer_shows_first_layer():
    processor = ToolpathProcessor(display_z=0.0, draw_travel_moves=False)
    processor.process(SQUARE)
    assert processor.collection.visible_segments() == []

    layers = processor.get_statistics()['geometry']['layers']
    processor.clamp_display_z(min(layers), max(layers))
    processor.process(SQUARE)
    assert len(processor.collection.visible_segments()) == 5
