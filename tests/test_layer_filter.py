"""Z layer visibility and colour classification tests."""
from core.geometry import ColorTag
from core.layer_filter import LAYER_TOLERANCE, classify_move, is_visible


def test_tolerance_constant():
    assert LAYER_TOLERANCE == 0.1


def test_segment_on_layer_is_visible():
    assert is_visible(2.0, 2.0, True)
    assert is_visible(2.05, 2.0, True)
    assert is_visible(1.95, 2.0, True)


def test_tolerance_edge_is_inclusive():
    assert is_visible(0.1, 0.0, True)
    assert is_visible(-0.1, 0.0, True)
    assert not is_visible(0.1000001, 0.0, True)


def test_segment_off_layer_is_hidden():
    assert not is_visible(2.2, 2.0, True)
    assert not is_visible(1.8, 2.0, True)


def test_draw_flag_is_required():
    assert not is_visible(2.0, 2.0, False)


def test_classify_extrusion():
    assert classify_move(1.5, False) == (ColorTag.EXTRUDE, True)
    assert classify_move(0.0, False) == (ColorTag.EXTRUDE, True)


def test_classify_retraction():
    assert classify_move(-1.0, False) == (ColorTag.RETRACT, True)


def test_classify_travel_follows_toggle():
    assert classify_move(None, True) == (ColorTag.TRAVEL, True)
    assert classify_move(None, False) == (ColorTag.TRAVEL, False)
