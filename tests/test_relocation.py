import pytest

from conftest import HookFailure, Tracked, TrackingType
from rawvec.memory.arena import Arena
from rawvec.memory.lifetimes import (
    ElementType,
    MOVED_FROM,
    UNINITIALIZED,
    construct_n,
    copy_construct_n,
    destroy_n,
    move_assign_at,
)
from rawvec.memory.relocation import StorageTransaction, Strategy, select_strategy


def filled_arena(element_type, count, capacity=None):
    arena = Arena(capacity if capacity is not None else count)
    for i in range(count):
        arena[i] = Tracked(i)
    return arena


@pytest.mark.parametrize("nothrow_move, copyable, expected", [
    (True, True, Strategy.MOVE),
    (False, True, Strategy.COPY),
    (False, False, Strategy.MOVE),
    (True, False, Strategy.MOVE),
])
def test_strategy_selection(nothrow_move, copyable, expected):
    assert select_strategy(TrackingType(nothrow_move, copyable)) is expected


def test_default_element_type():
    element_type = ElementType()
    assert element_type.default() is None
    assert element_type.construct(5) == 5
    with pytest.raises(TypeError):
        element_type.construct(1, 2)

    original = [1, 2]
    duplicate = element_type.copy(original)
    assert duplicate == original and duplicate is not original
    assert element_type.move(original) is original


def test_factory_construction():
    element_type = ElementType(dict)
    assert element_type.default() == {}
    assert element_type.construct(a=1) == {"a": 1}


def test_construct_n_rolls_back_on_failure():
    class Failing(TrackingType):
        def default(self):
            if self.constructed == 2:
                raise HookFailure("third default")
            return self.construct(self.constructed)

    element_type = Failing()
    arena = Arena(4)
    with pytest.raises(HookFailure):
        construct_n(element_type, arena, 0, 4)

    assert element_type.destroyed == [0, 1]
    assert [arena[i] for i in range(4)] == [UNINITIALIZED] * 4


def test_copy_construct_n_rolls_back_on_failure(tracking):
    source = filled_arena(tracking, 3)
    target = Arena(3)
    tracking.fail_copy_at = 3

    with pytest.raises(HookFailure):
        copy_construct_n(tracking, source, 0, 3, target, 0)

    assert tracking.destroyed == [0, 1]
    assert [source[i] for i in range(3)] == [Tracked(0), Tracked(1), Tracked(2)]


def test_destroy_n_skips_sentinels(tracking):
    arena = filled_arena(tracking, 3)
    arena[1] = MOVED_FROM
    destroy_n(tracking, arena, 0, 3)
    assert tracking.destroyed == [0, 2]


def test_move_assign_at_leaves_source_moved_from(tracking):
    arena = filled_arena(tracking, 2)
    move_assign_at(tracking, arena, 0, 1)
    assert arena[0] == Tracked(1)
    assert arena[1] is MOVED_FROM
    assert tracking.destroyed == [0]


def test_commit_by_copy_destroys_originals(copy_only):
    source = filled_arena(copy_only, 3)
    with StorageTransaction(copy_only, source, 6) as txn:
        txn.relocate(0, 3, 0)
        target = txn.commit(3)

    assert target.capacity == 6
    assert [target[i] for i in range(3)] == [Tracked(0), Tracked(1), Tracked(2)]
    assert copy_only.destroyed == [0, 1, 2]
    assert [source[i] for i in range(3)] == [UNINITIALIZED] * 3


def test_commit_by_move_hands_values_over(tracking):
    source = filled_arena(tracking, 2)
    originals = [source[0], source[1]]
    with StorageTransaction(tracking, source, 4) as txn:
        txn.relocate(0, 2, 0)
        target = txn.commit(2)

    assert target[0] is originals[0] and target[1] is originals[1]
    assert tracking.destroyed == []
    assert tracking.copies == 0


def test_failure_leaves_source_untouched(copy_only):
    source = filled_arena(copy_only, 3)
    copy_only.fail_copy_at = 3

    with pytest.raises(HookFailure):
        with StorageTransaction(copy_only, source, 8) as txn:
            txn.emplace(1, lambda: Tracked(99))
            txn.relocate(0, 1, 0)
            txn.relocate(1, 2, 2)

    assert sorted(copy_only.destroyed) == [0, 1, 99]
    assert txn.target.capacity == 0
    assert [source[i] for i in range(3)] == [Tracked(0), Tracked(1), Tracked(2)]


def test_failed_move_drops_borrowed_values():
    move_only = TrackingType(nothrow_move=False, copyable=False)
    source = filled_arena(move_only, 3)
    move_only.fail_move_at = 2

    with pytest.raises(HookFailure):
        with StorageTransaction(move_only, source, 4) as txn:
            txn.relocate(0, 3, 0)

    assert move_only.destroyed == []
    assert [source[i] for i in range(3)] == [Tracked(0), Tracked(1), Tracked(2)]
