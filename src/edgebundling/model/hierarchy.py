"""
Hierarchy Builder
=================
Turns the flat Records into the fixed three level tree the diagram is drawn
from: root -> category groups -> leaf entities.

The tree is an arena: every TreeNode lives in `Hierarchy.nodes` and refers to
its parent and children by index. The parent owns the ordered list of child
indices, the child only keeps a back-reference index. A read-only
identifier -> leaf index table is built once alongside the tree and is what
the link resolver looks references up in.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from edgebundling.model.records import Record

logger = logging.getLogger(__name__)

ROOT_DEPTH = 0
GROUP_DEPTH = 1
LEAF_DEPTH = 2


@dataclass
class TreeNode:
    """Root, category group or leaf of the diagram tree."""
    index: int
    key: str
    depth: int
    parent: Optional[int] = None
    children: list[int] = field(default_factory=list)
    size: float = 1.0
    record: Optional[Record] = None

    # Polar position, populated by the radial layout (degrees, drawing units)
    angle: Optional[float] = None
    radius: Optional[float] = None

    @property
    def is_leaf(self) -> bool:
        return self.depth == LEAF_DEPTH

    @property
    def identifier(self) -> Optional[str]:
        return self.record.id if self.record is not None else None


@dataclass
class Hierarchy:
    nodes: list[TreeNode]
    id_index: Mapping[str, int]

    ROOT_INDEX = 0

    @property
    def root(self) -> TreeNode:
        return self.nodes[self.ROOT_INDEX]

    @property
    def is_empty(self) -> bool:
        return not self.root.children

    def node(self, index: int) -> TreeNode:
        return self.nodes[index]

    def groups(self) -> list[TreeNode]:
        """Depth-1 nodes in first-seen category order."""
        return [self.nodes[i] for i in self.root.children]

    def leaves(self) -> list[TreeNode]:
        """Depth-2 nodes in tree (left-to-right) order."""
        return [self.nodes[c] for g in self.root.children for c in self.nodes[g].children]

    def iter_depth_first(self) -> Iterator[TreeNode]:
        stack = [self.ROOT_INDEX]
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def parent(self, node: TreeNode) -> Optional[TreeNode]:
        return self.nodes[node.parent] if node.parent is not None else None

    def ancestors(self, index: int) -> list[int]:
        """Indices from `index` up to and including the root."""
        chain = [index]
        parent = self.nodes[index].parent
        while parent is not None:
            chain.append(parent)
            parent = self.nodes[parent].parent
        return chain

    def leaf_by_id(self, identifier: str) -> Optional[TreeNode]:
        index = self.id_index.get(identifier)
        return self.nodes[index] if index is not None else None

    @property
    def max_depth(self) -> int:
        return max((n.depth for n in self.nodes), default=ROOT_DEPTH)


def build_hierarchy(records: Iterable[Record], root_key: str = "") -> Hierarchy:
    """
    Group records by category (first-seen order) into root -> group -> leaf.

    Args:
        records: Parsed input records, in dataset order.
        root_key: Label of the synthetic root node.

    Returns:
        The Hierarchy. An empty input yields a root without children. A record
        whose identifier was already seen is skipped, so identifiers stay
        unique among leaves.
    """
    root = TreeNode(index=Hierarchy.ROOT_INDEX, key=root_key, depth=ROOT_DEPTH)
    nodes: list[TreeNode] = [root]
    group_index: dict[str, int] = {}
    id_index: dict[str, int] = {}

    for record in records:
        if record.id in id_index:
            logger.warning(f"Duplicate record identifier '{record.id}' ({record.name!r}) skipped.")
            continue

        group = group_index.get(record.category)
        if group is None:
            group = len(nodes)
            nodes.append(TreeNode(index=group, key=record.category, depth=GROUP_DEPTH, parent=root.index))
            root.children.append(group)
            group_index[record.category] = group

        leaf = len(nodes)
        nodes.append(TreeNode(index=leaf, key=record.name, depth=LEAF_DEPTH, parent=group, record=record))
        nodes[group].children.append(leaf)
        id_index[record.id] = leaf

    # Group weight is the number of leaves it holds
    for g in root.children:
        nodes[g].size = float(len(nodes[g].children))
    root.size = float(len(id_index))

    logger.info(f"Built hierarchy: {len(group_index)} groups, {len(id_index)} leaves.")
    return Hierarchy(nodes=nodes, id_index=MappingProxyType(id_index))
