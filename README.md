# dskit

`dskit` is a small collection of data structures, with no dependencies outside the standard library:

- `dskit.limit`: sliding-window rate limiters. `RingWindowLimiter` counts requests and `RingWindowLimiterWeight` adds up request weights. Both are thread-safe.
- `dskit.circular`: bounded containers. `LoopQueue` is a FIFO queue and `LoopDeque` is a double-ended queue.
- `dskit.skiplist`: `SkipList` keeps entries ordered by a pluggable comparator. It can look entries up by key or by rank, where ranks start at 1. It can allow or refuse duplicate keys.
- `dskit.compare`, `dskit.options` and `dskit.iterator` hold the comparators, the skip-list options and a cursor that walks a skip list's levels.

This is a library only. It has no command-line tool.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Rate limiting

```python
from dskit.limit import RingWindowLimiter, RateLimitExceeded

limiter = RingWindowLimiter(1.0, 2)     # at most 2 requests in any 1-second window
limiter.allow()
limiter.allow()
try:
    limiter.allow()
except RateLimitExceeded:
    print("slow down")
len(limiter)                            # requests recorded in the current window
```

```python
from dskit.limit import RingWindowLimiterWeight

weighted = RingWindowLimiterWeight(1.0, 10)   # total weight 10 in any 1-second window
weighted.allow(5)
weighted.allow(4)
weighted.total_weight                         # 9
weighted.allow(2)                             # raises RateLimitExceeded: 9 + 2 > 10
```

The window size can be given in seconds (an int or a float) or as a `datetime.timedelta`.

A request expires once its timestamp is at or before the start of the window. A weight of 0 or less raises `ValueError`.

Both limiters take an optional keyword-only `clock`. It is a callable that returns seconds and defaults to `time.monotonic`, which makes the limiters easy to drive in tests.

## Circular queues

```python
from dskit.circular import LoopQueue, LoopDeque, QueueFullError, QueueEmptyError

q = LoopQueue(3)
q.push(1)
q.push(2)
q.front()   # 1
q.tail()    # 2
q.pop()     # 1
len(q)      # 1

d = LoopDeque(3)
d.push_front(7)
d.push_tail(2)
d.get_front()   # 7
d.get_tail()    # 2
d.pop_tail()    # 2
d.pop_front()   # 7
```

Both containers have `is_empty()`, `is_full()`, `len()`, a `capacity` property and iteration from front to tail.

Errors:

- Pushing into a full container raises `QueueFullError`.
- Popping or peeking an empty container raises `QueueEmptyError`.
- A capacity below 1 raises `ValueError`.

## Skip list

```python
from dskit.compare import IntComparator
from dskit.options import with_allow_the_same_key
from dskit.skiplist import SkipList

sl = SkipList(IntComparator(), with_allow_the_same_key(False))
sl.insert(1, "one")             # 1  (the new entry's rank)
sl.insert(3, "three")           # 2
sl.insert(2, "two")             # 2
sl.insert(2, "again")           # None: duplicates are refused

sl.get_by_rank(2)               # "two"
sl.get_by_rank_range(1, 3)      # ["one", "two", "three"]
sl.get_rand_with_rank_by_key(3) # ("three", 3)
sl.delete_by_rank(1)            # True
len(sl)                         # 2
list(sl)                        # [(2, "two"), (3, "three")]
```

Duplicate keys are allowed by default. Entries with equal keys stay in insertion order.

### Reading

- `first()` and `last()` return the data at the two ends of the list.
- `get_first_by_key`, `get_tail_by_key`, `get_rand_by_key` and `get_all_by_key` look entries up by key.
- `get_first_with_rank_by_key`, `get_tail_with_rank_by_key` and `get_rand_with_rank_by_key` return `(data, rank)`, or `(None, -1)` when the key is absent.
- `get_by_rank(rank)` returns one entry's data.
- `get_by_rank_range(start, end)` is inclusive and clipped to the list.

### Changing

- `update_by_key` and `delete_by_key` act only when exactly one entry has the key.
- `update_batch_by_key` and `delete_batch_by_key` act on every entry with the key.
- `update_by_rank` and `delete_by_rank` act on the entry at that rank.

All of these return `True` when something changed.

### Options

Options are passed to the `SkipList` constructor after the comparator:

- `with_max_level(level)` sets the most levels a node may have. The default is 32.
- `with_probability(probability)` sets the probability used when generating levels. It must be strictly between 0 and 1. The default is 0.5.
- `with_level_rand_source(rd)` uses the `random.Random` instance `rd` to generate levels.
- `with_level_cache_size(size, *levels)` sets the level buffer size. It may also preset the levels given to the next inserted nodes, at most `size` of them, each between 1 and the maximum level.
- `with_allow_the_same_key(allow)` sets whether duplicate keys are allowed.

An invalid argument raises `SkipListOptionError`, a subclass of `ValueError`. The error is raised when the option is created, or, for preset levels out of range, when the `SkipList` is built.

### Comparators

A custom ordering subclasses `dskit.compare.Comparator` and implements `compare(a, b)`, which returns -1, 0 or 1.

Two comparators come with the package:

- `IntComparator` orders integers in ascending order.
- `PriceTimeComparator` orders `PriceTime(price, create_time)` keys by price, then by creation time, both ascending.

### Inspecting the structure

`dskit.iterator.SkipListIterator(sl)` is a cursor over the list's nodes. Its methods are:

- `init_head()`
- `next(level)`
- `set_node(node)`
- `node()`
- `span(level)`

`render_graph()` returns a text drawing of every level, top level first, suited to data of up to three characters. `print_graph()` prints that drawing.