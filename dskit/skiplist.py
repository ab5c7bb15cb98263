"""An ordered skip list with rank lookups, keyed by a three-way comparator."""

from __future__ import annotations

import random
from collections import deque
from typing import Any, Iterator, List, Optional, Tuple

from dskit.compare import Comparator
from dskit.options import Option, SkipListOptionError

DEFAULT_MAX_LEVEL = 32
DEFAULT_PROBABILITY = 0.5
DEFAULT_LEVEL_CACHE_SIZE = 8


class _Level:
    """One forward link of a node: the next node and the rank distance to it."""

    __slots__ = ("next", "span")

    def __init__(self) -> None:
        self.next: Optional[_Node] = None
        self.span = 0


class _Node:
    __slots__ = ("prev", "levels", "key", "data")

    def __init__(self, key: Any, data: Any, height: int):
        self.prev: Optional[_Node] = None
        self.levels = [_Level() for _ in range(height)]
        self.key = key
        self.data = data


class SkipList:
    """Keeps (key, data) pairs sorted by key; ranks run from 1 to len().

    Equal keys are kept in insertion order unless duplicates are disallowed
    with ``with_allow_the_same_key(False)``.
    """

    def __init__(self, comparator: Comparator, *options: Option):
        self.comparator = comparator
        self.max_level = DEFAULT_MAX_LEVEL
        self.probability = DEFAULT_PROBABILITY
        self.rng: random.Random = random.Random()
        self.level_cache_size = DEFAULT_LEVEL_CACHE_SIZE
        self.preset_levels: deque = deque()
        self.allow_same_key = True
        for option in options:
            option(self)
        invalid = [lv for lv in self.preset_levels if not 1 <= lv <= self.max_level]
        if invalid:
            raise SkipListOptionError(
                f"preset levels must lie between 1 and {self.max_level}: {invalid}"
            )
        self.head = _Node(None, None, self.max_level)
        self.tail: Optional[_Node] = None
        self.current_max_level = 0
        self._length = 0

    # comparisons

    def _eq(self, a: Any, b: Any) -> bool:
        return self.comparator.compare(a, b) == 0

    def _gt(self, a: Any, b: Any) -> bool:
        return self.comparator.compare(a, b) > 0

    # node creation and bookkeeping

    def _next_level(self) -> int:
        if self.preset_levels:
            return self.preset_levels.popleft()
        level = 1
        while level < self.max_level and self.probability <= self.rng.random():
            level += 1
        return level

    def _new_node(self, key: Any, data: Any) -> _Node:
        height = self._next_level()
        if height - 1 > self.current_max_level:
            self.current_max_level = height - 1
        self._length += 1
        return _Node(key, data, height)

    def _refresh_max_level(self) -> None:
        if self._length > 0:
            for lv in range(self.current_max_level, -1, -1):
                if self.head.levels[lv].next is not None:
                    self.current_max_level = lv
                    return
        self.current_max_level = 0

    # searches

    def _find_any_with_rank(self, key: Any) -> Tuple[Optional[_Node], int]:
        if self._length == 0:
            return None, -1
        rank = 0
        pre = self.head
        for lv in range(self.current_max_level, -1, -1):
            while True:
                link = pre.levels[lv]
                if link.next is None or self._gt(link.next.key, key):
                    if pre is not self.head and self._eq(pre.key, key):
                        return pre, rank
                    break
                rank += link.span
                pre = link.next
        return None, -1

    def _find_any(self, key: Any) -> Optional[_Node]:
        return self._find_any_with_rank(key)[0]

    def _find_first_with_rank(self, key: Any) -> Tuple[Optional[_Node], int]:
        node, rank = self._find_any_with_rank(key)
        if node is not None:
            while node.prev is not None and self._eq(key, node.prev.key):
                node = node.prev
                rank -= 1
        return node, rank

    def _find_last_with_rank(self, key: Any) -> Tuple[Optional[_Node], int]:
        node, rank = self._find_any_with_rank(key)
        if node is not None:
            while node.levels[0].next is not None and self._eq(key, node.levels[0].next.key):
                node = node.levels[0].next
                rank += 1
        return node, rank

    def _find_all(self, key: Any) -> List[_Node]:
        node = self._find_any(key)
        if node is None:
            return []
        before = []
        prev = node.prev
        while prev is not None and self._eq(key, prev.key):
            before.append(prev)
            prev = prev.prev
        found = before[::-1]
        found.append(node)
        nxt = node.levels[0].next
        while nxt is not None and self._eq(key, nxt.key):
            found.append(nxt)
            nxt = nxt.levels[0].next
        return found

    def _is_unique(self, node: _Node) -> bool:
        nxt = node.levels[0].next
        return (node.prev is None or not self._eq(node.key, node.prev.key)) and (
            nxt is None or not self._eq(node.key, nxt.key)
        )

    def _node_at(self, rank: int) -> Optional[_Node]:
        if not 0 < rank <= self._length:
            return None
        if rank == 1:
            return self.head.levels[0].next
        if rank == self._length:
            return self.tail
        current = 0
        pre = self.head
        for lv in range(self.current_max_level, -1, -1):
            while True:
                link = pre.levels[lv]
                if link.next is None or link.span + current > rank:
                    if current == rank:
                        return pre
                    break
                current += link.span
                pre = link.next
        return None

    def _nodes_in_range(self, start: int, end: int) -> Iterator[_Node]:
        start = max(start, 1)
        end = min(end, self._length)
        if start > end:
            return
        node = self._node_at(start)
        for _ in range(end - start + 1):
            yield node
            node = node.levels[0].next

    # structural changes

    def _add(self, key: Any, data: Any) -> Optional[int]:
        if not self.allow_same_key and self._find_any(key) is not None:
            return None
        node = self._new_node(key, data)
        if self._length == 1:
            for lv in range(self.current_max_level + 1):
                self.head.levels[lv].next = node
                self.head.levels[lv].span = 1
            self.tail = node
            return 1

        height = len(node.levels)
        prevs: dict = {}
        nexts: dict = {}
        ranks: dict = {}
        rank = 0
        pre = self.head
        for lv in range(self.current_max_level, -1, -1):
            while True:
                link = pre.levels[lv]
                if link.next is None or self._gt(link.next.key, key):
                    break
                rank += link.span
                pre = link.next
            link = pre.levels[lv]
            if lv >= height:
                if link.next is not None:
                    link.span += 1
            else:
                prevs[lv] = pre
                ranks[pre] = rank
                if link.next is not None:
                    nexts[lv] = link.next
                    ranks[link.next] = link.span + rank + 1
        rank += 1

        for lv in range(height - 1, -1, -1):
            prev = prevs[lv]
            link = prev.levels[lv]
            link.span = rank - ranks[prev]
            node.levels[lv].next = link.next
            link.next = node
            nxt = nexts.get(lv)
            if nxt is not None:
                node.levels[lv].span = ranks[nxt] - rank
        node.prev = None if prevs[0] is self.head else prevs[0]
        if nexts.get(0) is not None:
            nexts[0].prev = node
        if self.tail is None or self.tail.levels[0].next is not None:
            self.tail = node
        return rank

    def _remove(self, target: _Node) -> None:
        if self.tail is target:
            self.tail = target.prev

        later_equals = set()
        nxt = target.levels[0].next
        while nxt is not None and self._eq(target.key, nxt.key):
            later_equals.add(nxt)
            nxt = nxt.levels[0].next

        pre = self.head
        for lv in range(self.current_max_level, -1, -1):
            while True:
                link = pre.levels[lv]
                nxt = link.next
                if nxt is None or self._gt(nxt.key, target.key) or nxt in later_equals:
                    if nxt is not None:
                        link.span -= 1
                    break
                if nxt is target:
                    gone = target.levels[lv]
                    link.next = gone.next
                    link.span = 0 if gone.next is None else link.span + gone.span - 1
                    if lv == 0 and gone.next is not None:
                        gone.next.prev = target.prev
                    break
                pre = nxt

        self._length -= 1
        if len(target.levels) - 1 >= self.current_max_level:
            self._refresh_max_level()

    # public interface

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        node = self.head.levels[0].next
        while node is not None:
            yield node.key, node.data
            node = node.levels[0].next

    def first(self) -> Any:
        """Data of the lowest-ranked entry, or None if empty."""
        if self._length == 0:
            return None
        return self.head.levels[0].next.data

    def last(self) -> Any:
        """Data of the highest-ranked entry, or None if empty."""
        if self._length == 0:
            return None
        return self.tail.data

    def get_first_by_key(self, key: Any) -> Any:
        node = self._find_first_with_rank(key)[0]
        return None if node is None else node.data

    def get_tail_by_key(self, key: Any) -> Any:
        node = self._find_last_with_rank(key)[0]
        return None if node is None else node.data

    def get_rand_by_key(self, key: Any) -> Any:
        """Data of some entry with an equal key, or None."""
        node = self._find_any(key)
        return None if node is None else node.data

    def get_all_by_key(self, key: Any) -> List[Any]:
        return [node.data for node in self._find_all(key)]

    def get_rand_with_rank_by_key(self, key: Any) -> Tuple[Any, int]:
        """(data, rank) of some entry with an equal key, or (None, -1)."""
        node, rank = self._find_any_with_rank(key)
        return (None if node is None else node.data), rank

    def get_first_with_rank_by_key(self, key: Any) -> Tuple[Any, int]:
        node, rank = self._find_first_with_rank(key)
        return (None if node is None else node.data), rank

    def get_tail_with_rank_by_key(self, key: Any) -> Tuple[Any, int]:
        node, rank = self._find_last_with_rank(key)
        return (None if node is None else node.data), rank

    def get_by_rank(self, rank: int) -> Any:
        node = self._node_at(rank)
        return None if node is None else node.data

    def get_by_rank_range(self, start: int, end: int) -> List[Any]:
        """Data of the entries ranked start..end inclusive, clipped to the list."""
        return [node.data for node in self._nodes_in_range(start, end)]

    def update_batch_by_key(self, key: Any, data: Any) -> bool:
        """Set data on every entry with an equal key; True if any was found."""
        found = self._find_all(key)
        for node in found:
            node.data = data
        return bool(found)

    def update_by_key(self, key: Any, data: Any) -> bool:
        """Set data on the entry with an equal key, only if it is the only one."""
        node = self._find_any(key)
        if node is not None and self._is_unique(node):
            node.data = data
            return True
        return False

    def update_by_rank(self, rank: int, data: Any) -> bool:
        node = self._node_at(rank)
        if node is None:
            return False
        node.data = data
        return True

    def delete_batch_by_key(self, key: Any) -> bool:
        """Remove every entry with an equal key; True if any was removed."""
        if self.allow_same_key:
            found = self._find_all(key)
        else:
            node = self._find_any(key)
            found = [] if node is None else [node]
        for node in found:
            self._remove(node)
        return bool(found)

    def delete_by_key(self, key: Any) -> bool:
        """Remove the entry with an equal key, only if it is the only one."""
        node = self._find_any(key)
        if node is not None and self._is_unique(node):
            self._remove(node)
            return True
        return False

    def delete_by_rank(self, rank: int) -> bool:
        node = self._node_at(rank)
        if node is None:
            return False
        self._remove(node)
        return True

    def insert(self, key: Any, data: Any) -> Optional[int]:
        """Insert an entry and return its rank.

        Returns None when duplicates are disallowed and the key is present.
        """
        return self._add(key, data)