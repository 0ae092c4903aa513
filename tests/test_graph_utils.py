from lightgrad import Tape, Tensor, format_graph, graph_summary


def test_tape_is_topological():
    a, b = Tensor([1, 2]), Tensor([3, 4])
    c = a * b
    d = c + a
    tape = Tape.record(d)
    assert len(tape) == 4
    assert tape.nodes[-1].out is d
    for i, node in enumerate(tape.nodes):
        assert all(p < i for p in node.parents)
    assert tape.nodes[tape.index_of(c)].parents == [tape.index_of(a), tape.index_of(b)]


def test_tape_marks_number_operands():
    a = Tensor([1, 2])
    tape = Tape.record(a * 3)
    assert tape.nodes[-1].parents == [0, -1]


def test_graph_summary():
    a, b = Tensor([1, 2]), Tensor([3, 4])
    y = (a * b) + a
    summary = graph_summary(y)
    assert summary == {
        'nodes': 4,
        'edges': 4,
        'leaves': 2,
        'max_fan_in': 2,
        'operations': {'mul': 1, 'add': 1},
    }


def test_format_graph():
    a, b = Tensor([1, 2]), Tensor([3, 4])
    text = format_graph(a * b - 1)
    lines = text.splitlines()
    assert lines[0] == "Node 0: leaf shape=(2,)"
    assert lines[2].startswith("Node 2: mul")
    assert lines[2].endswith("<- [Node0, Node1]")
    assert lines[3].endswith("<- [Node2, const]")


def test_format_graph_truncates():
    x = Tensor([1])
    y = x
    for _ in range(5):
        y = y + 1
    assert format_graph(y, max_nodes=3).splitlines()[-1] == "... (3 more nodes)"
