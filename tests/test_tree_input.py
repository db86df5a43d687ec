"""Tests for tree input adapters."""

import pytest

from tree_input import AdjacencyTree, from_children, from_edges, read_edge_list


def test_from_edges_is_symmetric():
    tree = from_edges([(0, 1), (1, 2)])
    assert tree.vertex_count() == 3
    assert list(tree.neighbors(0)) == [1]
    assert sorted(tree.neighbors(1)) == [0, 2]
    assert list(tree.neighbors(2)) == [1]
    assert tree.edge_count() == 2


def test_from_edges_with_explicit_count():
    tree = from_edges([(0, 1)], n=4)
    assert tree.vertex_count() == 4
    assert list(tree.neighbors(3)) == []


def test_from_edges_empty():
    assert from_edges([]).vertex_count() == 0


def test_from_edges_rejects_bad_indices():
    with pytest.raises(ValueError):
        from_edges([(0, -1)])
    with pytest.raises(ValueError):
        from_edges([(0, 5)], n=3)


def test_from_children():
    tree = from_children({1: [2, 3], 2: [4, 5], 3: [6]})
    assert tree.vertex_count() == 7
    assert sorted(tree.neighbors(2)) == [1, 4, 5]
    assert list(tree.neighbors(0)) == []


def test_from_children_single_vertex():
    tree = from_children({0: []})
    assert tree.vertex_count() == 1


def test_adjacency_tree_is_frozen():
    source = [[1], [0]]
    tree = AdjacencyTree(source)
    source[0].append(7)
    assert tree.neighbors(0) == (1,)
    assert len(tree) == 2


def test_read_edge_list(tmp_path):
    path = tmp_path / "tree.txt"
    path.write_text(
        "# sample tree\n"
        "n 5\n"
        "0 1\n"
        "\n"
        "1 2   # trailing comment\n"
        "1 3\n"
    )
    tree = read_edge_list(str(path))
    assert tree.vertex_count() == 5
    assert sorted(tree.neighbors(1)) == [0, 2, 3]
    assert list(tree.neighbors(4)) == []


def test_read_edge_list_reports_line(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("0 1\n1 x\n")
    with pytest.raises(ValueError, match="bad.txt:2"):
        read_edge_list(str(path))


def test_from_children_keeps_childless_keys():
    tree = from_children({0: [1], 5: []})
    assert tree.vertex_count() == 6
    assert list(tree.neighbors(5)) == []
