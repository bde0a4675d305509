"""The commands of the queue manager.

Every command acts on the pair of queues loaded for this invocation. A
command either succeeds, in which case the queues are saved afterwards, or
raises a `RingqError` and nothing is saved.
"""
from typing import List, Sequence, Tuple
import logging as log

from . import errors
from .config import MODE_FIFO, Configuration
from .queue import MAX_VALUE, RingQueue


def parse_integer(arg: str) -> int:
    """Parses an integer in decimal, hexadecimal (`0x`), or octal. As in C,
    a leading zero marks an octal number, so `010` is eight."""
    try:
        return int(arg, 0)
    except ValueError:
        # `int(arg, 0)` refuses a leading zero, which is octal here
        return int(arg, 8)


def queue_number(arg: str) -> int:
    """Converts a 1-based queue number into an index into the queue pair."""
    try:
        number = parse_integer(arg)
    except ValueError:
        raise errors.InvalidQueueNumber(arg)
    if number not in (1, 2):
        raise errors.InvalidQueueNumber(arg)
    return number - 1


def parse_element(arg: str) -> int:
    """Parses a queue element. Values outside of the unsigned 32-bit range
    are trimmed to their low 32 bits."""
    try:
        value = parse_integer(arg)
    except ValueError:
        raise errors.InvalidArgument("element", arg, "expected an integer")
    trimmed = value & MAX_VALUE
    if trimmed != value:
        log.info(f"Element {value} trimmed to {trimmed}")
    return trimmed


def parse_bit(arg: str) -> int:
    """Parses a bit number, counted from 1 (least significant) to 32."""
    try:
        bit = parse_integer(arg)
    except ValueError:
        raise errors.InvalidArgument("bit", arg, "expected an integer")
    if not 1 <= bit <= 32:
        raise errors.InvalidArgument("bit", arg, "should lie between 1 and 32")
    return bit


def format_values(values: Sequence[int]) -> str:
    return " ".join(str(v) for v in values)


class Command:
    """
    A command that can be selected on the command line.

    `code` is the hexadecimal command id, `name` an alternative spelling and
    `args` the names of the positional arguments the command expects.
    """

    code: int
    name: str
    args: Tuple[str, ...] = ()
    description: str

    def usage(self) -> str:
        return " ".join([f"<{a}>" for a in self.args])

    def check_args(self, args: List[str]) -> List[str]:
        if len(args) < len(self.args):
            raise errors.MissingArguments(self.name, self.args)
        if len(args) > len(self.args):
            log.warning(
                f"Command `{self.name}' ignores extra arguments: "
                + " ".join(args[len(self.args) :])
            )
        return args[: len(self.args)]

    def __call__(self, queues: List[RingQueue], args: List[str], cfg: Configuration):
        return self.run(queues, self.check_args(args), cfg)

    def run(self, queues: List[RingQueue], args: List[str], cfg: Configuration):
        raise NotImplementedError

    def __str__(self):
        return f"{self.name}: {self.description}"


class Add(Command):
    code = 0x00
    name = "add"
    args = ("queue", "element")
    description = "Add an <element> to a <queue>"

    def run(self, queues, args, cfg):
        queue = queues[queue_number(args[0])]
        queue.push_back(parse_element(args[1]))


class Remove(Command):
    code = 0x01
    name = "remove"
    args = ("queue", "element")
    description = "Remove an <element> from a <queue>"

    def run(self, queues, args, cfg):
        queue = queues[queue_number(args[0])]
        queue.remove(queue.find(parse_element(args[1])))


class Show(Command):
    code = 0x02
    name = "show"
    args = ("queue",)
    description = "Print size and contents of a <queue>"

    def run(self, queues, args, cfg):
        queue = queues[queue_number(args[0])]
        print(f"Queue size: {len(queue)}")
        print(f"Contents: {format_values(queue)}")


class Print(Command):
    code = 0x03
    name = "print"
    args = ("queue",)
    description = "Print contents of a <queue>"

    def run(self, queues, args, cfg):
        print(format_values(queues[queue_number(args[0])]))


class Merge(Command):
    code = 0x04
    name = "merge"
    description = "Merge the queues in a zipper pattern into the first one"

    def run(self, queues, args, cfg):
        queues[0].merge_into(queues[1])


class FindBit(Command):
    code = 0x05
    name = "find-bit"
    args = ("queue", "bit")
    description = "Find elements in a <queue> which have bit <bit> set"

    def run(self, queues, args, cfg):
        queue = queues[queue_number(args[0])]
        mask = 1 << (parse_bit(args[1]) - 1)
        print(format_values([v for v in queue if v & mask]))


class Dequeue(Command):
    code = 0x06
    name = "dequeue"
    args = ("queue",)
    description = "Dequeue a <queue> and print the element"

    def run(self, queues, args, cfg):
        queue = queues[queue_number(args[0])]
        # `push_back` inserts at the back, so the oldest element is at the
        # front.
        value = queue.pop_front() if cfg.mode == MODE_FIFO else queue.pop_back()
        print(value)


ALL_COMMANDS = [Add, Remove, Show, Print, Merge, FindBit, Dequeue]
