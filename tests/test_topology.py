import pytest

from mazegen.errors import ConfigurationError, DisconnectedGraphError, InconsistentTreeError
from mazegen.graph import Graph, Vertex
from mazegen.lattice import LatticeSpec, build_rectangular_lattice
from mazegen.topology import TREE_BUILDERS, generate_maze, generate_topology, tree_path

ALGORITHMS = sorted(TREE_BUILDERS)


def _components(vertex_keys, edge_keys):
    """Union-find component count."""
    parent = {k: k for k in vertex_keys}

    def find(k):
        while parent[k] != k:
            parent[k] = parent[parent[k]]
            k = parent[k]
        return k

    count = len(parent)
    for a, b in edge_keys:
        ra, rb = find(a), find(b)
        if ra != rb:
            parent[ra] = rb
            count -= 1
    return count


@pytest.mark.parametrize("algorithm", ALGORITHMS)
@pytest.mark.parametrize("seed", [0, 1, 7, 12345])
def test_spanning_tree_has_n_minus_one_edges_and_one_component(algorithm, seed):
    dual = build_rectangular_lattice(6, 5)
    tree, _ = generate_topology(dual, seed, algorithm=algorithm)
    assert tree.edge_count == dual.vertex_count - 1
    keys = [v.key for v in tree.vertices()]
    assert _components(keys, [e.keys() for e in tree.connections()]) == 1


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_tree_edges_come_from_dual(algorithm):
    dual = build_rectangular_lattice(5, 5)
    tree, _ = generate_topology(dual, 3, algorithm=algorithm)
    for e in tree.connections():
        assert dual.are_connected(e.source, e.destination)


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_same_seed_same_maze(algorithm):
    lattice = LatticeSpec(7, 6)
    a = generate_maze(lattice, 42, algorithm)
    b = generate_maze(lattice, 42, algorithm)
    assert a.tree_keys() == b.tree_keys()
    assert a.path_keys() == b.path_keys()
    assert a.signature() == b.signature()


def test_different_seeds_usually_differ():
    lattice = LatticeSpec(8, 8)
    signatures = {generate_maze(lattice, s).signature() for s in range(10)}
    assert len(signatures) > 1


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_path_joins_opposite_corners(algorithm):
    maze = generate_maze(LatticeSpec(5, 4), 9, algorithm)
    keys = maze.path_keys()
    assert keys[0][0] == (0, 0)
    assert keys[-1][1] == (3, 4)
    for (_, b), (c, _) in zip(keys, keys[1:]):
        assert b == c
    for e in maze.path:
        assert maze.spanning_tree.are_connected(e.source, e.destination)
    assert maze.path_cell_count == len(maze.path) + 1
    assert len({k for pair in keys for k in pair}) == maze.path_cell_count


def test_path_extraction_is_stable():
    dual = build_rectangular_lattice(6, 6)
    tree, path = generate_topology(dual, 5)
    start, end = dual.vertices()[0], dual.vertices()[-1]
    assert tree_path(tree, start, end) == path
    assert tree_path(tree, start, end) == path


def test_explicit_terminals():
    dual = build_rectangular_lattice(4, 4)
    vs = dual.vertices()
    tree, path = generate_topology(dual, 11, start=vs[5], end=vs[5])
    assert path == []
    tree, path = generate_topology(dual, 11, start=vs[3], end=vs[12])
    assert path[0].source is vs[3]
    assert path[-1].destination is vs[12]


def test_two_by_two_lattice():
    maze = generate_maze(LatticeSpec(2, 2), 0)
    assert maze.spanning_tree.edge_count == 3
    assert len(maze.path) == 2
    assert maze.path_cell_count == 3
    assert maze.ratio == pytest.approx(0.75)


def test_works_on_plain_graphs():
    g = Graph()
    vs = [Vertex(i) for i in range(5)]
    for v in vs:
        g.add_vertex(v)
    for a, b in [(0, 1), (1, 2), (2, 0), (2, 3), (3, 4), (4, 1)]:
        g.connect(vs[a], vs[b])
    tree, path = generate_topology(g, 3)
    assert tree.edge_count == 4
    assert path[0].source is vs[0] and path[-1].destination is vs[4]


def test_disconnected_graph_is_rejected():
    g = Graph()
    vs = [Vertex(i) for i in range(4)]
    for v in vs:
        g.add_vertex(v)
    g.connect(vs[0], vs[1])
    g.connect(vs[2], vs[3])
    for algorithm in ALGORITHMS:
        with pytest.raises(DisconnectedGraphError):
            generate_topology(g, 1, algorithm=algorithm)


def test_unknown_algorithm():
    with pytest.raises(ConfigurationError):
        generate_topology(build_rectangular_lattice(2, 2), 0, algorithm="wilson")


def test_tree_path_reports_unreachable_end():
    g = Graph()
    a, b = Vertex("a"), Vertex("b")
    g.add_vertex(a)
    g.add_vertex(b)
    with pytest.raises(InconsistentTreeError):
        tree_path(g, a, b)


def test_passages_are_tree_edges_only():
    maze = generate_maze(LatticeSpec(3, 3), 4)
    for v in maze.dual_graph.vertices():
        assert maze.passages(v) == maze.spanning_tree.edges(v)
        assert len(maze.passages(v)) <= len(maze.dual_graph.edges(v))
