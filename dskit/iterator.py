"""A cursor over the nodes of a skip list, with a text rendering of its levels."""

from __future__ import annotations

from typing import Any, Optional

from dskit.skiplist import SkipList


class SkipListIterator:
    """Walks the nodes of a skip list along any of its levels.

    The cursor starts at the head node, which holds no data.
    """

    def __init__(self, skiplist: SkipList):
        self._skiplist = skiplist
        self._node: Optional[Any] = skiplist.head

    def init_head(self) -> None:
        """Move the cursor back to the head node."""
        self._node = self._skiplist.head

    def next(self, level: int) -> Optional[Any]:
        """Advance along ``level`` and return the new node, or None past the end."""
        if self._node is not None:
            self._node = self._node.levels[level].next
        return self._node

    def set_node(self, node: Optional[Any]) -> None:
        """Place the cursor on ``node``."""
        self._node = node

    def node(self) -> Optional[Any]:
        """The node under the cursor, or None past the end."""
        return self._node

    def span(self, level: int) -> int:
        """Rank distance from the current node to its successor on ``level``."""
        if self._node is None:
            raise ValueError("iterator is past the end of the list")
        return self._node.levels[level].span

    def render_graph(self) -> str:
        """Draw every level of the list, top level first; suits data of up to 3 characters."""
        saved = self._node
        head = self._skiplist.head
        lines = []
        try:
            for level in range(self._skiplist.current_max_level, -1, -1):
                parts = [f"{level} |\t"]
                self.init_head()
                while self._node is not None:
                    if self._node is not head:
                        parts.append(f"{self._node.data!s:>3}")
                    for remaining in range(self.span(level), 0, -1):
                        parts.append("---" + f"{'---':>3}" if remaining > 1 else "-->")
                    self.next(level)
                lines.append("".join(parts) + "\n")
        finally:
            self._node = saved
        return "".join(lines)

    def print_graph(self) -> None:
        """Print the drawing made by render_graph."""
        print(self.render_graph(), end="")