"""Two persisted fixed-capacity queues of unsigned 32-bit integers."""

from .queue import RingQueue  # noqa: F401

__version__ = "0.1"
