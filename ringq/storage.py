"""Persistence of ring queues.

A queue is stored as a flat binary file of little-endian unsigned 32-bit
values, offset 0 first. There is no header: the number of values is the
file size divided by four.
"""
import logging as log
from io import IOBase
from pathlib import Path

import numpy as np

from .errors import CapacityExceeded, Malformed
from .queue import RingQueue

# On-disk representation of a single value.
VALUE_DTYPE = np.dtype("<u4")


def read_values(stream: IOBase, name="queue data") -> np.ndarray:
    """Reads every value from `stream`, in file order."""
    data = stream.read()
    if len(data) % VALUE_DTYPE.itemsize != 0:
        raise Malformed(
            name,
            f"{len(data)} bytes is not a whole number of "
            f"{VALUE_DTYPE.itemsize}-byte values",
        )
    return np.frombuffer(data, dtype=VALUE_DTYPE)


def write_values(queue: RingQueue, stream: IOBase):
    """Writes the queue, in logical order, to `stream`."""
    out = np.empty(queue.size, dtype=VALUE_DTYPE)
    queue.copy_out(out)
    stream.write(out.tobytes())


def load_queue(path, capacity: int) -> RingQueue:
    """Loads a queue from the file at `path`.

    A file that doesn't exist or can't be read gives an empty queue.
    Raises `Malformed` if the file holds more than `capacity` values.
    """
    path = Path(path)
    if not path.exists():
        log.debug(f"{path} doesn't exist. Starting with an empty queue.")
        return RingQueue(capacity)

    try:
        with path.open("rb") as f:
            values = read_values(f, f"queue file `{path}'")
    except OSError as e:
        log.warning(f"Can't read {path}: {e}. Starting with an empty queue.")
        return RingQueue(capacity)

    try:
        queue = RingQueue.from_values(values, capacity)
    except CapacityExceeded as e:
        raise Malformed(
            f"queue file `{path}'",
            f"it holds {len(values)} values but the capacity is {capacity}. "
            "Increase `queue.capacity' or remove the file.",
        ) from e
    log.debug(f"Loaded {queue.size} values from {path}")
    return queue


def save_queue(queue: RingQueue, path):
    """Saves `queue` into the file at `path`.
    For reasons of simplicity I/O errors are only logged.
    """
    path = Path(path)
    try:
        with path.open("wb") as f:
            write_values(queue, f)
    except OSError as e:
        log.warning(f"Failed to save the queue into {path}: {e}")
        return
    log.debug(f"Saved {queue.size} values into {path}")
