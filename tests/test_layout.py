import math

import numpy as np
import pytest

from insightgraph.core.analysis.models import CooccurrenceEdge
from insightgraph.core.layout.graph import GraphLink, GraphNode, node_degrees, select_subgraph
from insightgraph.core.layout.simulation import ForceSimulation
from insightgraph.core.layout.view import MAX_SCALE, GraphView, ViewTransform


def _dist(frame, a, b):
    (ax, ay), (bx, by) = frame.position_of(a), frame.position_of(b)
    return math.hypot(ax - bx, ay - by)


# ── subgraph selection ──────────────────────────────────────────────────

def test_degrees_sum_edge_weights(triangle_edges):
    edges = triangle_edges + [CooccurrenceEdge("apple", "kiwi", 3)]
    assert node_degrees(edges) == {"apple": 5, "banana": 2, "cherry": 2, "kiwi": 3}


def test_select_subgraph_orders_by_degree():
    edges = [CooccurrenceEdge("a", "b", 1), CooccurrenceEdge("b", "c", 4)]
    graph = select_subgraph(edges)
    assert [n.id for n in graph.nodes] == ["b", "c", "a"]
    assert graph.links[0] == GraphLink(graph.index_of("a"), graph.index_of("b"), 1)


def test_select_subgraph_caps():
    edges = [CooccurrenceEdge(f"n{i:02d}", f"n{j:02d}", 1)
             for i in range(50) for j in range(i + 1, min(50, i + 4))]
    graph = select_subgraph(edges)
    assert len(graph.nodes) <= 40
    assert len(graph.links) <= 80
    for link in graph.links:
        assert 0 <= link.source < len(graph.nodes)
        assert 0 <= link.target < len(graph.nodes)


def test_empty_edges_give_empty_graph():
    graph = select_subgraph([])
    assert graph.is_empty
    assert graph.links == ()


def test_node_radius_and_link_distance():
    assert GraphNode("x", 4).radius == pytest.approx(11.8)
    assert GraphLink(0, 1, 1).distance == 74
    assert GraphLink(0, 1, 10).distance == 40


# ── simulation ──────────────────────────────────────────────────────────

def test_triangle_settles_equilateral(triangle_edges):
    sim = ForceSimulation(select_subgraph(triangle_edges), 700, 520)
    frame = sim.run()
    assert sim.converged
    d = [_dist(frame, "apple", "banana"), _dist(frame, "apple", "cherry"),
         _dist(frame, "banana", "cherry")]
    assert max(d) / min(d) < 1.1
    assert frame.positions.mean(axis=0) == pytest.approx([350, 260], abs=1e-3)


def test_frames_are_finite_and_read_only(triangle_edges):
    sim = ForceSimulation(select_subgraph(triangle_edges))
    frame = sim.tick()
    assert np.isfinite(frame.positions).all()
    assert frame.segments.shape == (3, 4)
    with pytest.raises(ValueError):
        frame.positions[0, 0] = 1.0


def test_segments_follow_link_endpoints(triangle_edges):
    graph = select_subgraph(triangle_edges)
    frame = ForceSimulation(graph).run(max_ticks=10)
    for link, seg in zip(graph.links, frame.segments):
        assert tuple(seg[:2]) == tuple(frame.positions[link.source])
        assert tuple(seg[2:]) == tuple(frame.positions[link.target])


def test_layout_is_deterministic(triangle_edges):
    a = ForceSimulation(select_subgraph(triangle_edges)).run(max_ticks=50)
    b = ForceSimulation(select_subgraph(triangle_edges)).run(max_ticks=50)
    assert np.array_equal(a.positions, b.positions)


def test_max_ticks_and_stop(triangle_edges):
    sim = ForceSimulation(select_subgraph(triangle_edges))
    assert sim.run(max_ticks=5).tick == 5
    sim.stop()
    assert list(sim.iter_frames()) == []
    sim.reheat()
    assert sim.tick().tick == 6


def test_non_finite_positions_are_rejected(triangle_edges):
    sim = ForceSimulation(select_subgraph(triangle_edges))
    before = sim.positions.copy()

    def bad_links(pos, vel):
        vel[0] = np.inf

    sim._apply_links = bad_links
    frame = sim.tick()
    assert sim.rejected_frames == 1
    assert np.isfinite(frame.positions).all()
    assert tuple(frame.positions[0]) == tuple(before[0])


def test_run_async_reports_every_tick(triangle_edges):
    import asyncio

    sim = ForceSimulation(select_subgraph(triangle_edges))
    ticks = []
    last = asyncio.run(sim.run_async(lambda f: ticks.append(f.tick), interval=0, max_ticks=4))
    assert ticks == [1, 2, 3, 4]
    assert last.tick == 4


# ── view ────────────────────────────────────────────────────────────────

def test_view_transform_round_trip():
    t = ViewTransform.identity().translate(15, -5).scale_at(2.0, 100, 50)
    p = np.array([[3.0, 4.0], [120.0, 80.0]])
    assert np.allclose(t.invert(t.apply(p)), p)
    assert np.allclose(t.to_matrix() @ np.array([3.0, 4.0, 1.0]), [*t.apply([3.0, 4.0]), 1.0])


def test_zoom_keeps_anchor_fixed_and_clamps():
    t = ViewTransform.identity().scale_at(2.0, 100, 50)
    assert np.allclose(t.apply([100, 50]), [100, 50])
    assert ViewTransform.identity().scale_at(1000, 0, 0).k == MAX_SCALE


def test_pan_zoom_reset(triangle_edges):
    view = GraphView(triangle_edges)
    view.pan(10, 20)
    view.zoom(1.5)
    assert not view.transform.is_identity
    assert view.reset_view().is_identity


def test_view_does_not_touch_physics(triangle_edges):
    plain = GraphView(triangle_edges)
    plain.settle(40)
    busy = GraphView(triangle_edges)
    busy.select("apple")
    busy.zoom(3.0, 10, 10)
    busy.pan(50, 50)
    busy.settle(40)
    assert np.array_equal(plain.frame.positions, busy.frame.positions)


def test_selection(triangle_edges):
    view = GraphView(triangle_edges)
    view.select("banana")
    assert view.selected == "banana"
    with pytest.raises(KeyError):
        view.select("durian")
    view.clear_selection()
    assert view.selected is None


def test_node_at_uses_screen_coordinates(triangle_edges):
    view = GraphView(triangle_edges)
    view.settle()
    view.zoom(2.0)
    sx, sy = view.screen_positions()[view.graph.index_of("cherry")]
    assert view.node_at(sx, sy) == "cherry"
    assert view.node_at(-500, -500) is None


def test_set_edges_replaces_simulation(triangle_edges):
    view = GraphView(triangle_edges)
    old = view.simulation
    view.select("cherry")
    view.pan(5, 5)
    view.set_edges([CooccurrenceEdge("apple", "banana", 2)])
    assert old.stopped
    assert view.simulation is not old
    assert view.selected is None
    assert view.transform.is_identity
    assert view.frame.node_ids == ("apple", "banana")


def test_empty_view():
    view = GraphView([])
    assert view.is_empty
    assert view.node_at(0, 0) is None
    assert view.settle().positions.shape == (0, 2)


def test_export_png(tmp_path, triangle_edges):
    view = GraphView(triangle_edges)
    view.settle(60)
    view.select("apple")
    out = tmp_path / "graph.png"
    data = view.export_png(out)
    assert data.startswith(b"\x89PNG")
    assert out.read_bytes() == data
    view.close()
    assert view.simulation.stopped


def test_resize_recentres(triangle_edges):
    view = GraphView(triangle_edges)
    view.settle()
    view.resize(400, 300)
    assert not view.simulation.converged
    frame = view.settle()
    assert frame.positions.mean(axis=0) == pytest.approx([200, 150], abs=1e-3)
