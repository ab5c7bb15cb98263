import random

import pytest

from dskit.compare import IntComparator, PriceTime, PriceTimeComparator
from dskit.options import (
    SkipListOptionError,
    with_allow_the_same_key,
    with_level_cache_size,
    with_level_rand_source,
    with_max_level,
    with_probability,
)
from dskit.skiplist import SkipList


def _make(*options, seed=7):
    return SkipList(IntComparator(), with_level_rand_source(random.Random(seed)), *options)


@pytest.mark.parametrize("seed", [1, 2, 3, 42])
def test_operate_scenario(seed):
    sl = _make(with_allow_the_same_key(False), seed=seed)
    assert sl.insert(1, 1) == 1
    assert sl.insert(3, 3) == 2
    assert sl.insert(2, 2) == 2
    assert sl.insert(4, 2) == 4
    assert sl.update_batch_by_key(2, 22) is True
    assert sl.get_first_by_key(2) == 22
    assert sl.delete_batch_by_key(2) is True
    assert sl.delete_by_rank(3) is True
    sl.insert(4, 4)
    sl.insert(5, 5)
    sl.insert(11, 11)
    sl.insert(6, 6)
    sl.delete_batch_by_key(6)
    assert sl.get_by_rank(1) == 1
    assert sl.get_by_rank(4) == 5
    assert sl.get_by_rank(5) == 11
    assert sl.get_by_rank(6) is None
    assert sl.get_by_rank_range(1, 3) == [1, 3, 4]
    assert sl.get_rand_with_rank_by_key(4) == (4, 3)
    assert len(sl) == 5


def test_preset_levels_scenario():
    sl = SkipList(IntComparator(), with_level_cache_size(10, 2, 3, 4, 7, 4, 5))
    for key in [5, 1, 4, 2, 3, 6]:
        sl.insert(key, key * 10)
    assert [data for _, data in sl] == [10, 20, 30, 40, 50, 60]
    assert sl.current_max_level == 6
    assert sl.get_by_rank(3) == 30


def test_preset_level_beyond_max_level_rejected():
    with pytest.raises(SkipListOptionError):
        SkipList(IntComparator(), with_max_level(3), with_level_cache_size(4, 5))


def test_empty_list_queries():
    sl = _make()
    assert len(sl) == 0
    assert sl.first() is None
    assert sl.last() is None
    assert sl.get_by_rank(1) is None
    assert sl.get_by_rank_range(1, 10) == []
    assert sl.get_rand_with_rank_by_key(3) == (None, -1)
    assert sl.get_all_by_key(3) == []
    assert sl.delete_by_rank(1) is False
    assert sl.update_by_rank(1, "x") is False
    assert sl.delete_batch_by_key(3) is False


def test_duplicate_keys_keep_insertion_order():
    sl = _make()
    sl.insert(1, "one")
    assert sl.insert(5, "a") == 2
    assert sl.insert(5, "b") == 3
    assert sl.insert(5, "c") == 4
    sl.insert(9, "nine")
    assert sl.get_all_by_key(5) == ["a", "b", "c"]
    assert sl.get_first_by_key(5) == "a"
    assert sl.get_tail_by_key(5) == "c"
    assert sl.get_first_with_rank_by_key(5) == ("a", 2)
    assert sl.get_tail_with_rank_by_key(5) == ("c", 4)
    assert sl.get_rand_by_key(5) in {"a", "b", "c"}
    assert sl.update_by_key(5, "z") is False
    assert sl.delete_by_key(5) is False
    assert sl.update_batch_by_key(5, "z") is True
    assert sl.get_all_by_key(5) == ["z", "z", "z"]
    assert sl.delete_batch_by_key(5) is True
    assert [data for _, data in sl] == ["one", "nine"]
    assert sl.first() == "one"
    assert sl.last() == "nine"


def test_disallowed_duplicate_insert_returns_none():
    sl = _make(with_allow_the_same_key(False))
    assert sl.insert(3, "x") == 1
    assert sl.insert(3, "y") is None
    assert len(sl) == 1
    assert sl.get_rand_by_key(3) == "x"


def test_unique_update_and_delete_by_key():
    sl = _make()
    for key in [4, 2, 8]:
        sl.insert(key, str(key))
    assert sl.update_by_key(2, "two") is True
    assert sl.get_by_rank(1) == "two"
    assert sl.update_by_key(7, "seven") is False
    assert sl.delete_by_key(8) is True
    assert sl.last() == "4"
    assert sl.delete_by_key(8) is False
    assert len(sl) == 2


def test_update_by_rank():
    sl = _make()
    for key in [3, 1, 2]:
        sl.insert(key, key)
    assert sl.update_by_rank(2, "mid") is True
    assert sl.get_by_rank_range(1, 3) == [1, "mid", 3]


def test_rank_range_is_clipped():
    sl = _make()
    for key in range(1, 6):
        sl.insert(key, key)
    assert sl.get_by_rank_range(-3, 2) == [1, 2]
    assert sl.get_by_rank_range(4, 100) == [4, 5]
    assert sl.get_by_rank_range(5, 5) == [5]
    assert sl.get_by_rank_range(3, 2) == []
    assert sl.get_by_rank_range(6, 9) == []
    assert sl.get_by_rank_range(2, 4) == [2, 3, 4]


def test_delete_until_empty_then_reuse():
    sl = _make()
    for key in [2, 1]:
        sl.insert(key, key)
    assert sl.delete_by_rank(1) is True
    assert sl.delete_by_rank(1) is True
    assert len(sl) == 0
    assert sl.current_max_level == 0
    assert sl.last() is None
    assert sl.insert(7, 7) == 1
    assert sl.first() == 7
    assert sl.last() == 7


def test_price_time_comparator_ordering():
    sl = SkipList(PriceTimeComparator(), with_level_rand_source(random.Random(3)))
    sl.insert(PriceTime(10.0, 5), "late")
    sl.insert(PriceTime(9.5, 9), "cheap")
    sl.insert(PriceTime(10.0, 1), "early")
    assert sl.get_by_rank_range(1, 3) == ["cheap", "early", "late"]
    assert sl.get_rand_with_rank_by_key(PriceTime(10.0, 5)) == ("late", 3)


@pytest.mark.parametrize("seed", [0, 5, 11, 99])
@pytest.mark.parametrize("probability", [0.25, 0.5, 0.75])
def test_matches_sorted_model_under_random_operations(seed, probability):
    rng = random.Random(seed)
    sl = SkipList(
        IntComparator(),
        with_level_rand_source(random.Random(seed + 1)),
        with_probability(probability),
        with_max_level(8),
    )
    model = list(sl)
    for step in range(300):
        if model and rng.random() < 0.35:
            rank = rng.randint(1, len(model))
            assert sl.delete_by_rank(rank) is True
            del model[rank - 1]
        else:
            key = rng.randint(0, 30)
            rank = sl.insert(key, step)
            position = sum(1 for k, _ in model if k <= key)
            model.insert(position, (key, step))
            assert rank == position + 1
        assert len(sl) == len(model)
        assert list(sl) == model

    expected = [data for _, data in model]
    assert sl.get_by_rank_range(1, len(model)) == expected
    for rank, data in enumerate(expected, start=1):
        assert sl.get_by_rank(rank) == data
    for key in {k for k, _ in model}:
        matching = [i for i, (k, _) in enumerate(model) if k == key]
        assert sl.get_first_with_rank_by_key(key) == (model[matching[0]][1], matching[0] + 1)
        assert sl.get_tail_with_rank_by_key(key) == (model[matching[-1]][1], matching[-1] + 1)
        data, rank = sl.get_rand_with_rank_by_key(key)
        assert model[rank - 1] == (key, data)
    if model:
        assert sl.first() == expected[0]
        assert sl.last() == expected[-1]


def test_delete_batch_keeps_ranks_consistent():
    sl = _make(seed=13)
    keys = [5, 3, 5, 1, 5, 7, 3, 5]
    for index, key in enumerate(keys):
        sl.insert(key, index)
    assert sl.delete_batch_by_key(5) is True
    assert [k for k, _ in sl] == [1, 3, 3, 7]
    assert [sl.get_by_rank(r) for r in range(1, 5)] == [3, 1, 6, 5]
    assert sl.get_rand_with_rank_by_key(7) == (5, 4)