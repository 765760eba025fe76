import pytest

from mazegen.embedded import EmbeddedGraph
from mazegen.errors import GraphError
from mazegen.graph import Edge, Graph, Vertex


def _path_graph(n):
    g = Graph()
    vs = [Vertex(i) for i in range(n)]
    for v in vs:
        g.add_vertex(v)
    for a, b in zip(vs, vs[1:]):
        g.connect(a, b)
    return g, vs


def test_add_vertex_assigns_insertion_index():
    g = Graph()
    a, b = Vertex("a"), Vertex("b")
    assert g.add_vertex(a) == 0
    assert g.add_vertex(b) == 1
    assert g.index_of(b) == 1
    assert g.vertices() == [a, b]


def test_add_vertex_rejects_same_vertex_twice():
    g = Graph()
    v = Vertex("a")
    g.add_vertex(v)
    with pytest.raises(GraphError):
        g.add_vertex(v)


def test_vertices_with_equal_keys_are_distinct():
    g = Graph()
    g.add_vertex(Vertex((0, 0)))
    g.add_vertex(Vertex((0, 0)))
    assert g.vertex_count == 2


def test_connect_stores_one_record_per_endpoint():
    g, (a, b) = _path_graph(2)
    assert g.edges(a) == [Edge(a, b)]
    assert g.edges(b) == [Edge(b, a)]
    assert g.edge_count == 1
    assert list(g.connections()) == [Edge(a, b)]


def test_connect_requires_membership():
    g, (a, _) = _path_graph(2)
    with pytest.raises(GraphError):
        g.connect(a, Vertex("stranger"))


def test_connect_rejects_duplicates_and_self_loops():
    g, (a, b, c) = _path_graph(3)
    with pytest.raises(GraphError):
        g.connect(b, a)
    with pytest.raises(GraphError):
        g.connect(c, c)


def test_enumeration_is_restartable():
    g, vs = _path_graph(4)
    assert list(g) == list(g) == vs
    assert g.edges(vs[1]) == g.edges(vs[1])
    assert len(list(g.connections())) == len(list(g.connections())) == 3


def test_weight_is_kept_on_both_records():
    g, (a, b) = _path_graph(2)
    c = Vertex("c")
    g.add_vertex(c)
    g.connect(a, c, weight=2.5)
    assert [e.weight for e in g.edges(c)] == [2.5]
    assert [e.weight for e in g.edges(a) if e.destination is c] == [2.5]


def test_is_connected():
    g, vs = _path_graph(3)
    assert g.is_connected()
    g.add_vertex(Vertex("island"))
    assert not g.is_connected()
    assert not Graph().is_connected()


def test_spanning_keeps_vertices_and_order():
    g, vs = _path_graph(4)
    first = next(g.connections())
    sub = g.spanning([first])
    assert sub.vertices() == vs
    assert [sub.index_of(v) for v in vs] == [0, 1, 2, 3]
    assert sub.edge_count == 1
    assert g.edge_count == 3


def test_embedded_graph_positions_from_vertex_key():
    g = EmbeddedGraph(lambda v: (v.key * 10.0, 0.0))
    a, b = Vertex(1), Vertex(3)
    g.add_vertex(a)
    g.add_vertex(b)
    assert g.position(b) == (30.0, 0.0)
    assert g.positions() == [(10.0, 0.0), (30.0, 0.0)]
    assert g.bounds() == (10.0, 0.0, 30.0, 0.0)
    with pytest.raises(GraphError):
        g.position(Vertex(5))


def test_embedded_spanning_keeps_positioning():
    g = EmbeddedGraph(lambda v: (float(v.key), 1.0))
    a, b = Vertex(0), Vertex(1)
    g.add_vertex(a)
    g.add_vertex(b)
    g.connect(a, b)
    sub = g.spanning([])
    assert isinstance(sub, EmbeddedGraph)
    assert sub.position(b) == (1.0, 1.0)
