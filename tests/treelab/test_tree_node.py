from __future__ import annotations

import json

import pytest

from treelab.tree_node import (
    TreeNode,
    count_nodes,
    in_order,
    render_tree,
    snapshot,
    snapshot_json,
    tree_height,
)


def test_tree_node_rejects_non_integer_values() -> None:
    with pytest.raises(TypeError):
        TreeNode("invalid")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        TreeNode(True)


def test_tree_node_ids_are_unique() -> None:
    ids = {TreeNode(7).id for _ in range(50)}
    assert len(ids) == 50


def test_in_order_visits_left_node_right() -> None:
    root = TreeNode(2, TreeNode(1), TreeNode(3))
    assert in_order(root) == [1, 2, 3]
    assert in_order(None) == []


def test_height_and_count() -> None:
    root = TreeNode(1, TreeNode(2, TreeNode(3, TreeNode(4))))
    assert tree_height(root) == 4
    assert count_nodes(root) == 4
    assert tree_height(None) == 0
    assert count_nodes(None) == 0


def test_to_dict_omits_absent_children() -> None:
    root = TreeNode(5, left=TreeNode(3, id="b"), id="a")
    assert root.to_dict() == {"id": "a", "value": 5, "left": {"id": "b", "value": 3}}


def test_from_dict_restores_structure_and_ids() -> None:
    payload = {
        "id": "r",
        "value": 8,
        "left": {"id": "l", "value": 4},
        "right": {"id": "x", "value": 12, "left": {"id": "y", "value": 10}},
    }
    root = TreeNode.from_dict(payload)
    assert root.to_dict() == payload
    assert in_order(root) == [4, 8, 10, 12]


def test_from_dict_assigns_missing_ids() -> None:
    root = TreeNode.from_dict({"value": 1, "right": {"value": 2}})
    assert root.right is not None
    assert root.id and root.right.id and root.id != root.right.id


@pytest.mark.parametrize(
    "payload",
    [
        [1, 2],
        {"value": "one"},
        {"value": 1, "id": 5},
        {"value": 1, "left": {"value": None}},
    ],
)
def test_from_dict_rejects_malformed_payloads(payload: object) -> None:
    with pytest.raises(TypeError):
        TreeNode.from_dict(payload)  # type: ignore[arg-type]


def test_snapshot_json_is_deterministic() -> None:
    root = TreeNode(2, TreeNode(1, id="b"), id="a")
    assert snapshot(None) is None
    assert snapshot_json(None) == "null"
    assert json.loads(snapshot_json(root)) == root.to_dict()
    assert snapshot_json(root) == '{"id":"a","left":{"id":"b","value":1},"value":2}'


def test_render_tree_renders_structure_with_placeholders() -> None:
    root = TreeNode(1, TreeNode(2, right=TreeNode(4)), TreeNode(3))
    expected = "\n".join(["1", "2 3", "· 4 · ·"])
    assert render_tree(root) == expected


def test_render_tree_empty_tree() -> None:
    assert render_tree(None) == "<empty>"


def test_render_tree_trims_placeholder_only_levels() -> None:
    root = TreeNode(1, TreeNode(2), TreeNode(3))
    assert render_tree(root) == "\n".join(["1", "2 3"])


def test_render_tree_degenerate_tree_grows_linearly() -> None:
    root = None
    for value in range(40, 0, -1):
        root = TreeNode(value, right=root)

    lines = render_tree(root).splitlines()

    assert len(lines) == 40
    assert lines[0] == "1"
    assert lines[1:] == [f"· {value}" for value in range(2, 41)]
