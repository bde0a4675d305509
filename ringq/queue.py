from typing import Iterable, Iterator, List
import logging as log

import numpy as np

from .errors import CapacityExceeded, Empty, NotFound

# Capacity used when none is configured.
DEFAULT_CAPACITY = 10

# Largest value a queue element can hold.
MAX_VALUE = 2**32 - 1


class RingQueue:
    """A double-ended queue of unsigned 32-bit values with a fixed capacity.

    The values live in a numpy array of `capacity` slots. The queue itself
    may be discontinuous inside that array: `begin` is the slot of the
    logical element at offset 0 and the element at offset `i` lives in slot
    `(begin + i) % capacity`. For example, with a capacity of 7, `begin` 4
    and `size` 5:

    ```
    slot:    0   1   2   3   4   5   6
    offset: #3  #4   *   *  #0  #1  #2
    ```

    Slots marked `*` hold stale values and are never read.

    This layout lets both ends grow and shrink without moving memory:
    - `push_back` moves `begin` one slot to the left (wrapping to the end of
      the array) and writes the new value there. It becomes offset 0.
    - `pop_back` reads offset 0 and moves `begin` one slot to the right.
      Together with `push_back` this is a LIFO.
    - `pop_front` reads offset `size - 1` and leaves `begin` alone.
      Together with `push_back` this is a FIFO.

    Inherent to the queue is its `capacity`,
    which is given at initialization and cannot be exceeded.
    Failing operations raise a `QueueError` and leave the queue untouched.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Capacity should be a positive integer, got {capacity}")
        self.capacity = capacity
        self.storage = np.zeros(capacity, dtype=np.uint32)
        self.begin = 0
        self.size = 0

    @classmethod
    def from_values(cls, values: Iterable[int], capacity: int = DEFAULT_CAPACITY):
        """Builds a queue whose offset 0 is the first of `values`.
        Raises `CapacityExceeded` if there are more than `capacity` values.
        """
        data = np.asarray(list(values), dtype=np.uint32)
        if len(data) > capacity:
            raise CapacityExceeded(capacity, len(data))
        queue = cls(capacity)
        queue.storage[: len(data)] = data
        queue.size = len(data)
        return queue

    def _slot(self, offset: int) -> int:
        return (self.begin + offset) % self.capacity

    def _check_offset(self, offset: int):
        if not 0 <= offset < self.size:
            raise IndexError(
                f"Offset {offset} is out of range for a queue of size {self.size}"
            )

    def _logical(self) -> np.ndarray:
        # Values in logical order, as a fresh array.
        return self.storage[(self.begin + np.arange(self.size)) % self.capacity]

    def push_back(self, value: int) -> None:
        """Pushes `value` to the back of the queue. It becomes offset 0."""
        if not 0 <= value <= MAX_VALUE:
            raise ValueError(f"{value} does not fit in an unsigned 32-bit integer")
        if self.size == self.capacity:
            raise CapacityExceeded(self.capacity)
        self.begin = self.capacity - 1 if self.begin == 0 else self.begin - 1
        self.storage[self.begin] = value
        self.size += 1
        log.debug(f"push_back({value}): begin={self.begin}, size={self.size}")

    def pop_back(self) -> int:
        """Pops the back of the queue, i.e. the element at offset 0."""
        if self.size == 0:
            raise Empty()
        value = int(self.storage[self.begin])
        self.begin = 0 if self.begin == self.capacity - 1 else self.begin + 1
        self.size -= 1
        log.debug(f"pop_back() = {value}: begin={self.begin}, size={self.size}")
        return value

    def pop_front(self) -> int:
        """Pops the front of the queue, i.e. the element at offset `size - 1`."""
        if self.size == 0:
            raise Empty()
        value = self.get(self.size - 1)
        self.size -= 1
        log.debug(f"pop_front() = {value}: begin={self.begin}, size={self.size}")
        return value

    def find(self, value: int) -> int:
        """Returns the lowest offset holding `value`."""
        matches = np.flatnonzero(self._logical() == value)
        if len(matches) == 0:
            raise NotFound(value)
        return int(matches[0])

    def remove(self, offset: int) -> None:
        """Removes the element at `offset`, which must lie within the queue.
        The elements after it move one position closer to offset 0,
        so the order of the rest of the queue is preserved.
        """
        self._check_offset(offset)
        # Circular slots from `offset` to the last element.
        slots = (self.begin + np.arange(offset, self.size)) % self.capacity
        self.storage[slots[:-1]] = self.storage[slots[1:]]
        self.size -= 1
        log.debug(f"remove({offset}): begin={self.begin}, size={self.size}")

    def merge_into(self, other: "RingQueue") -> None:
        """Merges `other` into this queue in a zipper pattern.

        Offsets `2k` and `2k + 1` of the result are offset `k` of this queue
        and offset `k` of `other`, for as long as both queues have elements.
        Then the rest of the longer queue follows in order.
        For example, `[1, 3, 5]` and `[2, 4]` give `[1, 2, 3, 4, 5]`.

        Afterwards this queue starts at slot 0 and `other` is empty.
        Raises `CapacityExceeded` (and changes nothing) if the combined
        size is larger than this queue's capacity.
        """
        assert other is not self, "Cannot merge a queue into itself."
        total = self.size + other.size
        if total > self.capacity:
            raise CapacityExceeded(self.capacity, total)

        mine, theirs = self._logical(), other._logical()
        short = min(self.size, other.size)
        longer = mine if self.size >= other.size else theirs

        merged = np.empty(total, dtype=np.uint32)
        merged[0 : 2 * short : 2] = mine[:short]
        merged[1 : 2 * short : 2] = theirs[:short]
        merged[2 * short :] = longer[short:]

        self.storage[:total] = merged
        self.begin = 0
        self.size = total
        other.size = 0
        log.debug(f"merge_into(): size={self.size}")

    def copy_out(self, destination) -> None:
        """Writes the queue, in logical order, into `destination[:size]`.
        `destination` is anything that supports slice assignment (a list or
        a numpy array) and must hold at least `size` items.
        """
        assert len(destination) >= self.size, (
            f"Destination of length {len(destination)} "
            f"cannot hold {self.size} elements"
        )
        if self.begin + self.size <= self.capacity:
            destination[: self.size] = self.storage[self.begin : self.begin + self.size]
            return

        # The queue wraps past the end of the array: copy it in two runs.
        first = self.capacity - self.begin
        second = self.size - first
        destination[:first] = self.storage[self.begin :]
        destination[first : self.size] = self.storage[:second]

    def get(self, offset: int) -> int:
        """Returns the value at `offset`, which must lie within the queue."""
        self._check_offset(offset)
        return int(self.storage[self._slot(offset)])

    def to_list(self) -> List[int]:
        out = np.empty(self.size, dtype=np.uint32)
        self.copy_out(out)
        return out.tolist()

    def is_empty(self) -> bool:
        return self.size == 0

    def is_full(self) -> bool:
        return self.size == self.capacity

    def __getitem__(self, offset: int) -> int:
        return self.get(offset)

    def __iter__(self) -> Iterator[int]:
        return (self.get(i) for i in range(self.size))

    def __len__(self) -> int:
        return self.size

    def __str__(self):
        return str(self.to_list())

    def __repr__(self):
        return (
            f"RingQueue(capacity={self.capacity}, begin={self.begin}, "
            f"values={self.to_list()})"
        )
