"""Tests for graph simplification and execution ordering."""

import logging

import pytest

from cwlflow.core.exceptions import NoEntryPointError
from cwlflow.core.graph import find_unsequenced, get_sequence, simplify_graph
from cwlflow.core.models import SimpleNode


@pytest.fixture
def nodes(make_node):
    def _nodes(*ids):
        return [make_node(node_id, "p") for node_id in ids]

    return _nodes


class TestSimplifyGraph:
    """Test reduction of the multi-edge graph to adjacency lists."""

    def test_one_simple_node_per_node_in_order(self, nodes):
        """Every node is kept, in input order, even without links."""
        simple = simplify_graph(nodes(3, 1, 2), [])
        assert [s.id for s in simple] == [3, 1, 2]
        assert all(s.incoming == [] and s.outgoing == [] for s in simple)

    def test_links_become_edges(self, nodes, make_link):
        """A link adds a successor on the source and a predecessor on the target."""
        simple = simplify_graph(nodes(1, 2), [make_link(1, 2)])
        assert simple[0] == SimpleNode(id=1, incoming=[], outgoing=[2])
        assert simple[1] == SimpleNode(id=2, incoming=[1], outgoing=[])

    def test_parallel_links_collapse(self, nodes, make_link):
        """Links between the same ordered pair with different ports give one edge."""
        links = [make_link(1, 2, outlet=0, inlet=0), make_link(1, 2, outlet=1, inlet=0), make_link(1, 2, 0, 2)]
        simple = simplify_graph(nodes(1, 2), links)
        assert simple[0].outgoing == [2]
        assert simple[1].incoming == [1]

    def test_opposite_directions_are_distinct(self, nodes, make_link):
        """a -> b and b -> a are two different edges."""
        simple = simplify_graph(nodes(1, 2), [make_link(1, 2), make_link(2, 1)])
        assert simple[0].outgoing == [2]
        assert simple[0].incoming == [2]
        assert simple[1].outgoing == [1]
        assert simple[1].incoming == [1]

    def test_dangling_links_are_dropped(self, nodes, make_link):
        """Links to or from unknown nodes are ignored."""
        simple = simplify_graph(nodes(1, 2), [make_link(1, 99), make_link(42, 2), make_link(1, 2)])
        assert simple[0].outgoing == [2]
        assert simple[1].incoming == [1]

    def test_successors_keep_link_order(self, nodes, make_link):
        """Successor ids appear in the order their first link appears."""
        links = [make_link(1, 3), make_link(1, 2), make_link(1, 3, outlet=1)]
        simple = simplify_graph(nodes(1, 2, 3), links)
        assert simple[0].outgoing == [3, 2]


class TestGetSequence:
    """Test the FIFO topological ordering."""

    def test_no_links_keeps_input_order(self, nodes):
        """Without links every node is a source, so input order is kept."""
        simple = simplify_graph(nodes(5, 3, 9, 1), [])
        assert get_sequence(simple) == [5, 3, 9, 1]

    def test_linear_chain(self, nodes, make_link):
        """A chain is ordered along its links regardless of node order."""
        simple = simplify_graph(nodes(3, 2, 1), [make_link(1, 2), make_link(2, 3)])
        assert get_sequence(simple) == [1, 2, 3]

    def test_diamond(self, nodes, make_link):
        """A join node waits for all its predecessors."""
        links = [make_link(1, 2), make_link(1, 3), make_link(2, 4), make_link(3, 4)]
        simple = simplify_graph(nodes(1, 2, 3, 4), links)
        assert get_sequence(simple) == [1, 2, 3, 4]

    def test_ready_nodes_are_scheduled_first_in_first_out(self, nodes, make_link):
        """A node that becomes ready goes behind sources already queued."""
        simple = simplify_graph(nodes(1, 2, 3), [make_link(1, 2)])
        assert get_sequence(simple) == [1, 3, 2]

    def test_parallel_links_do_not_schedule_twice(self, nodes, make_link):
        """Collapsed multi-links still yield each node exactly once."""
        links = [make_link(1, 2, 0, 0), make_link(1, 2, 1, 1)]
        simple = simplify_graph(nodes(1, 2), links)
        assert get_sequence(simple) == [1, 2]

    def test_every_link_points_forward(self, nodes, make_link):
        """For a DAG, sources always precede targets."""
        pairs = [(1, 4), (2, 4), (4, 5), (3, 5), (5, 6), (2, 6), (1, 7), (7, 6)]
        links = [make_link(s, t) for s, t in pairs]
        sequence = get_sequence(simplify_graph(nodes(6, 5, 4, 7, 3, 2, 1), links))

        assert sorted(sequence) == [1, 2, 3, 4, 5, 6, 7]
        for source, target in pairs:
            assert sequence.index(source) < sequence.index(target)

    def test_empty_graph_has_no_entry_point(self):
        """An empty graph cannot be sequenced."""
        with pytest.raises(NoEntryPointError):
            get_sequence([])

    def test_pure_cycle_has_no_entry_point(self, nodes, make_link):
        """A 2-cycle with no other node has no source."""
        simple = simplify_graph(nodes(1, 2), [make_link(1, 2), make_link(2, 1)])
        with pytest.raises(NoEntryPointError) as exc_info:
            get_sequence(simple)
        assert "No start node" in str(exc_info.value)

    def test_cycle_behind_entry_is_left_out(self, nodes, make_link, caplog):
        """Nodes on a cycle never become ready; they are dropped with a warning."""
        links = [make_link(1, 2), make_link(2, 3), make_link(3, 2)]
        simple = simplify_graph(nodes(1, 2, 3), links)

        with caplog.at_level(logging.WARNING, logger="cwlflow.core.graph"):
            sequence = get_sequence(simple)

        assert sequence == [1]
        assert find_unsequenced(simple, sequence) == [2, 3]
        assert "left out" in caplog.text

    def test_self_loop_is_left_out(self, nodes, make_link):
        """A node linked to itself waits on itself forever."""
        simple = simplify_graph(nodes(1, 2), [make_link(2, 2)])
        assert get_sequence(simple) == [1]
