from __future__ import annotations
from typing import TYPE_CHECKING, Dict, List

from . import errors

if TYPE_CHECKING:
    from .commands import Command


class Registry:
    """
    Defines all the commands and how they are looked up from the command
    line, either by their hexadecimal code or by their name.
    """

    def __init__(self):
        self.by_code: Dict[int, Command] = {}
        self.by_name: Dict[str, Command] = {}

    def register(self, command: Command):
        """
        Adds `command` to the registry. Codes and names must be unique.
        """
        assert (
            command.code not in self.by_code
        ), f"Command code {command.code:#04x} is already registered."
        assert (
            command.name not in self.by_name
        ), f"Command `{command.name}' is already registered."
        self.by_code[command.code] = command
        self.by_name[command.name] = command

    def lookup(self, arg: str) -> Command:
        """
        Find the command named by `arg`. Hexadecimal codes take priority over
        names: `4` and `0x04` are codes, `merge` is a name.
        """
        try:
            code = int(arg, 16)
        except ValueError:
            code = None

        if code is not None and code in self.by_code:
            return self.by_code[code]
        if arg in self.by_name:
            return self.by_name[arg]

        raise errors.UnknownCommand(arg, self.known())

    def known(self) -> List[str]:
        return [f"{c.code:#04x} ({c.name})" for c in self.all()]

    def all(self) -> List[Command]:
        return [self.by_code[code] for code in sorted(self.by_code)]

    def __str__(self):
        lines = []
        for command in self.all():
            usage = f"{command.code:#04x} {command.usage()}"
            lines.append(f"    {usage:<28}{command.description}")
        return "\n".join(lines)
