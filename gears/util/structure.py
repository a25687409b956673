"""
Hierarchical structure helpers.
"""

from typing import Any, Dict, Iterable, Mapping


def convert_list_to_tree(
    rows: Iterable[Mapping[str, Any]],
    index_key: str = 'id',
    parent_key: str = 'parent_id',
    child_key: str = 'children',
) -> Dict[Any, Dict[str, Any]]:
    """
    Convert a flat list with parent ids to a nested tree.

        >>> convert_list_to_tree([
        ...     {'id': 1, 'parent_id': None},
        ...     {'id': 2, 'parent_id': 1},
        ... ])
        {1: {'id': 1, 'parent_id': None, 'children': {2: {'id': 2, 'parent_id': 1, 'children': {}}}}}

    Rows with a falsy parent id are roots. Every node holds its children
    keyed by id; rows whose parent is not in the list are left out.
    """
    indexed: Dict[Any, Dict[str, Any]] = {}

    # First pass: copy the rows indexed by id
    for row in rows:
        node = dict(row)
        node[child_key] = {}
        indexed[row[index_key]] = node

    # Second pass: link every node to its parent
    root: Dict[Any, Dict[str, Any]] = {}
    for node_id, node in indexed.items():
        parent_id = node.get(parent_key)
        if not parent_id:
            root[node_id] = node
        elif parent_id in indexed:
            indexed[parent_id][child_key][node_id] = node

    return root


def convert_flat_to_tree(
    rows: Iterable[Mapping[str, Any]],
    id_key: str = 'id',
    parent_id_key: str = 'parentId',
    child_nodes_field: str = 'children',
) -> Dict[Any, Dict[str, Any]]:
    """Same as convert_list_to_tree() with parentId as the default parent key."""
    return convert_list_to_tree(rows, id_key, parent_id_key, child_nodes_field)
