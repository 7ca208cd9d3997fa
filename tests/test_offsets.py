import logging
import math

import numpy as np
import pytest

from panelnet import (
    EngineConfig,
    build_panels,
    build_topology,
    line_perp,
    set_engine_config,
    width_at_vertex,
)

SQRT3 = math.sqrt(3.0)


def _all_offsets(offset_lines):
    return [off for pair in offset_lines for off in pair]


def test_collinear_chain_offsets(collinear_lines):
    topo = build_topology(collinear_lines, 0.01)

    panels, offset_lines, free_end_lines = build_panels(topo, [1.0], [1.0])

    assert len(panels) == 6
    assert [panel.line_index for panel in panels] == [0, 0, 1, 1, 2, 2]
    assert len(free_end_lines) == 4
    for off in _all_offsets(offset_lines):
        assert off.scale == pytest.approx(0.5)
        assert off.angle == pytest.approx(0.0)
        assert off.length == pytest.approx(1.0)
        assert not off.guarded

    at_b, at_a = offset_lines[0]
    assert at_b.vertex == 1
    assert not at_b.is_free_end
    assert at_b.partner == 2
    np.testing.assert_allclose(at_b.vector, [0.0, 1.0, 0.0], atol=1e-12)
    assert at_a.vertex == 0
    assert at_a.is_free_end
    assert at_a.partner is None
    np.testing.assert_allclose(at_a.vector, [0.0, 1.0, 0.0], atol=1e-12)

    right_at_a, right_at_b = offset_lines[1]
    np.testing.assert_allclose(right_at_a.vector, [0.0, -1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(right_at_b.vector, [0.0, -1.0, 0.0], atol=1e-12)


def test_star_junction_picks_smallest_angle_for_positive_side(star_lines):
    topo = build_topology(star_lines, 0.01)

    off = line_perp(topo, 0, False, 1, [1.0] * 3, [1.0] * 3)

    assert off.vertex == 0
    assert not off.is_free_end
    assert off.partner == 3
    assert off.angle == pytest.approx(-math.pi / 3)
    assert off.scale == pytest.approx(2.0 / 3.0)
    np.testing.assert_allclose(off.vector, [1.0, SQRT3 / 3, 0.0], atol=1e-9)
    assert off.length == pytest.approx(2.0 / SQRT3)


def test_star_junction_picks_largest_angle_for_negative_side(star_lines):
    topo = build_topology(star_lines, 0.01)

    off = line_perp(topo, 0, False, -1, [1.0] * 3, [1.0] * 3)

    assert off.partner == 2
    assert off.angle == pytest.approx(math.pi / 3)
    np.testing.assert_allclose(off.vector, [-1.0, SQRT3 / 3, 0.0], atol=1e-9)


def test_junction_width_averages_with_partner(star_lines):
    topo = build_topology(star_lines, 0.01)

    off = line_perp(topo, 0, False, 1, [1.0, 2.0, 3.0], [4.0, 5.0, 6.0])

    assert off.width == pytest.approx(2.0)
    assert off.scale == pytest.approx(4.0 / 3.0)


def test_width_at_vertex_follows_line_direction(star_lines):
    topo = build_topology(star_lines, 0.01)
    wb = [1.0, 2.0, 3.0]
    we = [4.0, 5.0, 6.0]

    assert width_at_vertex(topo, 0, 3, wb, we) == 3.0
    assert width_at_vertex(topo, 3, 0, wb, we) == 6.0
    assert width_at_vertex(topo, 1, 2, wb, we) == 1.0


def test_free_end_offsets_use_own_width():
    topo = build_topology([((0.0, 0.0), (2.0, 0.0))], 0.01)

    panels, offset_lines, free_end_lines = build_panels(topo, [1.0], [2.0])

    at_end, at_begin = offset_lines[0]
    assert at_end.is_free_end and at_begin.is_free_end
    np.testing.assert_allclose(at_end.vector, [0.0, 2.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(at_begin.vector, [0.0, 1.0, 0.0], atol=1e-12)
    assert at_end.scale == pytest.approx(1.0)
    assert len(free_end_lines) == 4
    assert panels[0].side1.width == pytest.approx(2.0)


def test_parallel_lines_offset_straight():
    topo = build_topology([((0.0, 0.0), (1.0, 0.0)), ((1.0, 0.0), (0.0, 0.0))], 0.01)

    off = line_perp(topo, 0, True, 1, [1.0, 1.0], [1.0, 1.0])

    assert not off.is_free_end
    assert off.partner is None
    assert off.angle == 0.0
    np.testing.assert_allclose(off.vector, [0.0, 1.0, 0.0], atol=1e-12)


def test_sharp_fold_falls_back_to_unscaled_bisector(sharp_turn):
    eps = 0.1
    topo = build_topology(sharp_turn(eps), 0.01)

    off = line_perp(topo, 0, True, 1, [1.0, 1.0], [1.0, 1.0])

    assert off.partner == 2
    assert off.angle == pytest.approx(-math.pi + eps)
    assert off.scale == pytest.approx(1.0 / (2.0 * math.sin(eps / 2) ** 2))
    assert off.guarded
    np.testing.assert_allclose(
        off.vector, [-math.sin(eps), 1.0 - math.cos(eps), 0.0], atol=1e-9
    )
    assert off.length == pytest.approx(2.0 * math.sin(eps / 2))


def test_moderate_fold_keeps_miter(sharp_turn):
    eps = 0.5
    topo = build_topology(sharp_turn(eps), 0.01)

    off = line_perp(topo, 0, True, 1, [1.0, 1.0], [1.0, 1.0])

    assert not off.guarded
    assert off.scale == pytest.approx(1.0 / (2.0 * math.sin(eps / 2) ** 2))
    assert off.length == pytest.approx(1.0 / math.sin(eps / 2))


def test_guard_threshold_comes_from_config(sharp_turn, tight_guard_config):
    topo = build_topology(sharp_turn(0.5), 0.01)

    off = line_perp(topo, 0, True, 1, [1.0, 1.0], [1.0, 1.0], config=tight_guard_config)

    assert off.guarded
    assert off.length == pytest.approx(2.0 * math.sin(0.25))


def test_process_wide_config_is_used_by_default(sharp_turn, restore_engine_config):
    topo = build_topology(sharp_turn(0.1), 0.01)
    set_engine_config(EngineConfig(miter_guard=1000.0))

    _, offset_lines, _ = build_panels(topo, [1.0], [1.0])

    assert not any(off.guarded for off in _all_offsets(offset_lines))


def test_guarded_offsets_are_reported(sharp_turn, caplog):
    caplog.set_level(logging.WARNING, logger="panelnet.offsets")
    topo = build_topology(sharp_turn(0.1), 0.01)

    build_panels(topo, [1.0], [1.0])

    assert any("unscaled bisector" in record.getMessage() for record in caplog.records)


def test_threaded_build_matches_sequential(star_lines):
    topo = build_topology(star_lines, 0.01)

    _, sequential, _ = build_panels(topo, [1.0, 1.5], [0.5], workers=1)
    _, threaded, _ = build_panels(topo, [1.0, 1.5], [0.5], workers=4)

    for expected, actual in zip(_all_offsets(sequential), _all_offsets(threaded)):
        assert expected.vertex == actual.vertex
        np.testing.assert_allclose(expected.vector, actual.vector)


def test_negative_scale_never_triggers_guard(sharp_turn):
    eps = 0.1
    topo = build_topology(sharp_turn(eps), 0.01)

    off = line_perp(topo, 0, True, 1, [-1.0, -1.0], [-1.0, -1.0])

    assert off.scale == pytest.approx(-1.0 / (2.0 * math.sin(eps / 2) ** 2))
    assert not off.guarded
    assert off.length == pytest.approx(1.0 / math.sin(eps / 2))


def test_offset_and_side_segments_share_endpoints(collinear_lines):
    topo = build_topology(collinear_lines, 0.01)
    panels, offset_lines, _ = build_panels(topo, [1.0], [1.0])

    start, end = offset_lines[0][0].to_segment()
    side_start, side_end = panels[0].side1.to_segment()

    np.testing.assert_allclose(start, [1.0, 0.0, 0.0])
    np.testing.assert_allclose(end, [1.0, 1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(side_start, start)
    np.testing.assert_allclose(side_end, end)
    assert panels[0].to_list() == [1, 0, 0]
    assert panels[3].to_list() == [1, 2, 1]
