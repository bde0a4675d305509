class RingqError(Exception):
    """
    An error caught by the queue manager.
    """


class QueueError(RingqError):
    """
    An operation on a ring queue could not be performed. The queue is left
    exactly as it was before the call.
    """


class CapacityExceeded(QueueError):
    """
    A push or a merge would take the queue past its capacity.
    """

    def __init__(self, capacity, needed=None):
        msg = f"The capacity of the queue ({capacity}) has been reached"
        if needed is not None:
            msg = f"Need room for {needed} elements but the capacity is {capacity}"
        super().__init__(msg)


class Empty(QueueError):
    """
    Attempted to pop from an empty queue.
    """

    def __init__(self):
        super().__init__("Can't pop an element: the queue is empty")


class NotFound(QueueError):
    """
    No element of the queue is equal to the requested value.
    """

    def __init__(self, value):
        super().__init__(f"Can't find {value} in the queue")


class UnknownCommand(RingqError):
    """
    The command code or name does not correspond to any known command.
    """

    def __init__(self, arg, known=None):
        msg = f"Unknown command `{arg}'"
        if known:
            msg += f". Known commands: {', '.join(known)}"
        super().__init__(msg)


class MissingArguments(RingqError):
    """
    A command was given fewer positional arguments than it needs.
    """

    def __init__(self, command, expected):
        n = len(expected)
        args = " ".join(f"<{a}>" for a in expected)
        super().__init__(
            f"Command `{command}' expects {n} arg{'s' if n != 1 else ''}: {args}"
        )


class InvalidQueueNumber(RingqError):
    """
    The queue selector was neither 1 nor 2.
    """

    def __init__(self, arg):
        super().__init__(f"Number of the queue should be either 1 or 2, got `{arg}'")


class InvalidArgument(RingqError):
    """
    A positional argument could not be interpreted.
    """

    def __init__(self, name, arg, why=None):
        msg = f"Invalid <{name}> `{arg}'"
        if why is not None:
            msg += f": {why}"
        super().__init__(msg)


class Malformed(RingqError):
    """
    An error raised when a queue file is malformed in some manner.
    """

    def __init__(self, name, msg):
        msg = f"""Malformed {name}: {msg}"""
        super().__init__(msg)


class UnsetConfiguration(RingqError):
    """
    A configuration key that is needed is not set.
    """

    def __init__(self, path):
        path_str = ".".join(path)
        msg = (
            f"'{path_str}' is not set. "
            + f"Use `ringq config {path_str} <val>` to set it."
        )
        super().__init__(msg)


class InvalidConfiguration(RingqError):
    """
    A configuration value has the wrong type or is out of range.
    """

    def __init__(self, path, value, why):
        path_str = ".".join(path)
        super().__init__(f"Invalid value `{value}' for '{path_str}': {why}")
