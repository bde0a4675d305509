from collections import deque

import numpy as np
import pytest

from ringq.errors import CapacityExceeded, Empty, NotFound
from ringq.queue import MAX_VALUE, RingQueue


def make_initial():
    """A queue of capacity 5 holding `1, 2, 3, 4` that wraps around the end
    of its storage: slots 3 and 4 hold `1, 2`, slots 0 and 1 hold `3, 4` and
    slot 2 is stale."""
    queue = RingQueue(5)
    queue.storage[:] = [3, 4, 0, 1, 2]
    queue.begin = 3
    queue.size = 4
    assert queue.to_list() == [1, 2, 3, 4]
    return queue


def check_invariants(queue):
    assert 0 <= queue.size <= queue.capacity
    assert 0 <= queue.begin < queue.capacity


def test_new_queue_is_empty():
    queue = RingQueue()
    assert queue.capacity == 10
    assert queue.begin == 0
    assert len(queue) == 0
    assert queue.is_empty()
    assert not queue.storage.any()


def test_invalid_capacity():
    with pytest.raises(ValueError):
        RingQueue(0)


def test_push_back():
    queue = make_initial()
    queue.push_back(15)
    assert queue.to_list() == [15, 1, 2, 3, 4]
    assert queue.is_full()

    # Can't insert any other element since the queue is already full.
    with pytest.raises(CapacityExceeded):
        queue.push_back(10)
    # Check that nothing changed.
    assert queue.to_list() == [15, 1, 2, 3, 4]
    assert queue.begin == 2
    check_invariants(queue)

    # Test array wrapping.
    queue.begin = 0
    queue.size -= 1
    assert queue.to_list() == [3, 4, 15, 1]
    queue.push_back(24)
    assert queue.begin == 4
    assert queue.to_list() == [24, 3, 4, 15, 1]


def test_push_back_rejects_out_of_range_values():
    queue = RingQueue(3)
    with pytest.raises(ValueError):
        queue.push_back(MAX_VALUE + 1)
    with pytest.raises(ValueError):
        queue.push_back(-1)
    assert queue.size == 0 and queue.begin == 0

    queue.push_back(MAX_VALUE)
    assert queue.pop_back() == MAX_VALUE


def test_pop_back():
    queue = make_initial()
    assert [queue.pop_back() for _ in range(4)] == [1, 2, 3, 4]
    assert queue.begin == 2
    # No more elements.
    with pytest.raises(Empty):
        queue.pop_back()
    assert queue.begin == 2
    check_invariants(queue)


def test_pop_front():
    queue = make_initial()
    assert [queue.pop_front() for _ in range(4)] == [4, 3, 2, 1]
    # `pop_front` never moves `begin`.
    assert queue.begin == 3
    # No more elements.
    with pytest.raises(Empty):
        queue.pop_front()


def test_lifo_and_fifo_round_trips():
    values = [7, 0, 42, MAX_VALUE, 7]

    queue = RingQueue(5)
    for v in values:
        queue.push_back(v)
    assert [queue.pop_back() for _ in values] == values[::-1]

    for v in values:
        queue.push_back(v)
    assert [queue.pop_front() for _ in values] == values


def test_find():
    queue = make_initial()
    assert queue.find(3) == 2
    # Slot 2 holds a stale 0, which must not be found.
    with pytest.raises(NotFound):
        queue.find(0)
    assert queue.find(2) == 1


def test_find_returns_lowest_offset():
    queue = RingQueue(4)
    for v in [5, 9, 5]:
        queue.push_back(v)
    assert queue.to_list() == [5, 9, 5]
    assert queue.find(5) == 0


def test_remove():
    queue = make_initial()
    queue.remove(3)  # Removing the last one
    assert queue.to_list() == [1, 2, 3]
    queue.remove(0)  # Removing the first one
    assert queue.to_list() == [2, 3]
    # Removing the rest
    queue.remove(1)
    queue.remove(0)
    assert queue.size == 0
    check_invariants(queue)


def test_remove_middle_across_the_boundary():
    queue = make_initial()
    queue.remove(1)
    assert queue.to_list() == [1, 3, 4]
    assert queue.begin == 3


def test_remove_out_of_range():
    queue = make_initial()
    with pytest.raises(IndexError):
        queue.remove(4)
    with pytest.raises(IndexError):
        queue.remove(-1)
    assert queue.to_list() == [1, 2, 3, 4]


def test_merge():
    queue1 = RingQueue.from_values([1, 3, 5], 5)
    queue2 = RingQueue.from_values([2, 4], 5)

    queue1.merge_into(queue2)
    assert queue1.to_list() == [1, 2, 3, 4, 5]
    assert queue1.begin == 0
    assert queue2.size == 0


def test_merge_longer_other():
    queue1 = RingQueue.from_values([1, 2], 6)
    queue2 = RingQueue.from_values([10, 20, 30, 40], 6)

    queue1.merge_into(queue2)
    assert queue1.to_list() == [1, 10, 2, 20, 30, 40]
    assert queue2.is_empty()


def test_merge_wrapped_queue():
    queue1 = RingQueue(10)
    queue2 = make_initial()
    queue1.push_back(9)
    queue1.push_back(8)

    queue1.merge_into(queue2)
    assert queue1.to_list() == [8, 1, 9, 2, 3, 4]
    assert queue2.size == 0
    check_invariants(queue2)


def test_merge_empty_queues():
    queue1, queue2 = RingQueue(3), RingQueue(3)
    queue1.merge_into(queue2)
    assert queue1.size == 0 and queue1.begin == 0


def test_merge_over_capacity():
    queue1 = RingQueue.from_values([1, 2, 3], 5)
    queue2 = RingQueue.from_values([4, 5, 6], 5)

    with pytest.raises(CapacityExceeded):
        queue1.merge_into(queue2)
    assert queue1.to_list() == [1, 2, 3]
    assert queue2.to_list() == [4, 5, 6]


def test_merge_exactly_full():
    queue1 = RingQueue.from_values([1, 2], 4)
    queue2 = RingQueue.from_values([3, 4], 4)
    queue1.merge_into(queue2)
    assert queue1.to_list() == [1, 3, 2, 4]
    assert queue1.is_full()


def test_copy_out():
    queue = make_initial()

    into_list = [0] * 6
    queue.copy_out(into_list)
    assert into_list == [1, 2, 3, 4, 0, 0]

    first = np.zeros(4, dtype=np.uint32)
    second = np.zeros(4, dtype=np.uint32)
    queue.copy_out(first)
    queue.copy_out(second)
    assert (first == second).all()
    assert first.tolist() == [1, 2, 3, 4]


def test_copy_out_contiguous():
    queue = RingQueue.from_values([5, 6, 7], 5)
    out = [None] * 3
    queue.copy_out(out)
    assert out == [5, 6, 7]


def test_wrap_around_against_deque():
    queue = RingQueue(5)
    model = deque()
    for v in range(1, 6):
        queue.push_back(v)
        model.appendleft(v)
    assert queue.pop_back() == model.popleft()
    queue.push_back(6)
    model.appendleft(6)
    assert queue.pop_front() == model.pop()
    queue.push_back(7)
    model.appendleft(7)

    out = [0] * len(queue)
    queue.copy_out(out)
    assert out == list(model)
    check_invariants(queue)


def test_from_values_over_capacity():
    with pytest.raises(CapacityExceeded):
        RingQueue.from_values(range(4), 3)


def test_accessors():
    queue = make_initial()
    assert queue[0] == 1
    assert queue.get(3) == 4
    assert list(queue) == [1, 2, 3, 4]
    assert str(queue) == "[1, 2, 3, 4]"
    with pytest.raises(IndexError):
        queue[4]
