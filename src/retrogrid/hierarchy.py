"""
Box hierarchy using networkx.

Uses networkx for:
- Parent/child graph representation
- Cycle detection in parent chains
- Nesting depth

Absolute positions are accumulated by walking the parent chain. Every
ancestor contributes its own position, exactly one character of border
and its padding. ASCII borders are always one character wide whatever the
pixel border thickness, which keeps nested offsets free of fractional
drift.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import networkx as nx

from .models import Box, SceneError

logger = logging.getLogger(__name__)


class BoxHierarchy:
    """
    Parent/child relations of a set of boxes.

    Boxes whose ``parent_id`` points at an unknown box are treated as roots.
    """

    def __init__(self, boxes: Iterable[Box]):
        self.boxes: Dict[str, Box] = {}
        self.graph: nx.DiGraph = nx.DiGraph()

        for box in boxes:
            self.boxes[box.id] = box
            self.graph.add_node(box.id)

        for box in self.boxes.values():
            if box.parent_id is None:
                continue
            if box.parent_id not in self.boxes:
                logger.debug(
                    "Box %r references missing parent %r; treating as root",
                    box.id,
                    box.parent_id,
                )
                continue
            self.graph.add_edge(box.parent_id, box.id)

    def has_cycle(self) -> bool:
        return not nx.is_directed_acyclic_graph(self.graph)

    def max_depth(self) -> int:
        """
        Deepest nesting level; a root box has depth 0.

        Only meaningful for acyclic hierarchies.
        """
        if self.graph.number_of_edges() == 0:
            return 0
        return nx.dag_longest_path_length(self.graph)

    def parent(self, box: Box) -> Optional[Box]:
        if box.parent_id is None:
            return None
        return self.boxes.get(box.parent_id)

    def children(self, box_id: str) -> List[Box]:
        if box_id not in self.graph:
            return []
        return [self.boxes[child] for child in self.graph.successors(box_id)]

    def ancestors(self, box: Box) -> List[Box]:
        """
        Ancestors of ``box``, nearest first.

        Raises:
            SceneError: If the parent chain loops back on itself.
        """
        chain: List[Box] = []
        seen = {box.id}
        current = self.parent(box)
        while current is not None:
            if current.id in seen:
                raise SceneError(f"Box '{box.id}' has a cyclic parent chain")
            seen.add(current.id)
            chain.append(current)
            current = self.parent(current)
        return chain

    def is_hidden(self, box: Box) -> bool:
        """True if the box or any of its ancestors is not visible."""
        if not box.visible:
            return True
        return any(not ancestor.visible for ancestor in self.ancestors(box))

    def content_origin(
        self, box: Box, char_width_ratio: float, char_height_ratio: float
    ) -> Tuple[float, float]:
        """
        Pixel origin of the area children of ``box`` are positioned in.

        That is the box's absolute position moved in by one character of
        border plus the box padding.
        """
        x, y = self.absolute_position(box, char_width_ratio, char_height_ratio)
        return (
            x + char_width_ratio + box.padding,
            y + char_height_ratio + box.padding,
        )

    def absolute_position(
        self, box: Box, char_width_ratio: float, char_height_ratio: float
    ) -> Tuple[float, float]:
        """
        Absolute pixel position of ``box``.

        Args:
            box: The box to place.
            char_width_ratio: Pixels per character column (one border width).
            char_height_ratio: Pixels per character row (one border height).

        Returns:
            (x, y) in pixels.
        """
        x, y = box.x, box.y
        for ancestor in self.ancestors(box):
            x += ancestor.x + char_width_ratio + ancestor.padding
            y += ancestor.y + char_height_ratio + ancestor.padding
        return x, y
