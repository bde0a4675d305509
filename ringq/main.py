import argparse
import logging as log
from sys import exit

import toml

from . import commands, errors, storage, utils
from .config import Configuration
from .registry import Registry

HELP_EPILOG = """The available commands are:
{commands}

Where
  * <queue>   is a queue number. Available options are 1 and 2.
  * <element> is a 32bit unsigned integer, which represents an item
              in a queue. If a passed integer lies outside of the
              unsigned-32-bit range, it will be trimmed.
  * <bit>     is a number of bit, starting from 1 and ending at 32.

Commands may also be given by name, e.g. `ringq add 1 42'.

# Merging queues

The queues are merged in a chess pattern, like a zipper slider brings
together the two sides. For example, queues of `1, 2, 3' and `4, 5, 6'
will be merged into `1, 4, 2, 5, 3, 6'.
After the merge the second queue will be emptied, and the first one will
contain the merge result.

# Queues

The queues have a maximum length of {capacity} and are operated in a {mode}
mode. The queues are loaded into memory from the files {files}
respectively, and are saved to the same files if the program terminates
correctly, with a success exit code.

# Configuration

Use `ringq config' to show the configuration and
`ringq config <key> <value>' to change it, e.g. `ringq config queue.mode lifo'.
"""


def register_commands(registry):
    """
    Register the queue commands.
    """
    for command in commands.ALL_COMMANDS:
        registry.register(command())


def help_epilog(registry, cfg):
    """The extended help text, which depends on the configuration."""
    try:
        capacity, mode = cfg.capacity, cfg.mode.upper()
        files = " and ".join(f"`{f}'" for f in cfg.queue_files())
    except errors.RingqError as e:
        log.warning(e)
        capacity, mode, files = "<invalid>", "<invalid>", "<invalid>"
    return HELP_EPILOG.format(
        commands=registry, capacity=capacity, mode=mode, files=files
    )


def run_command(command, args, cfg):
    """Load both queues, run `command` and save the queues if it succeeded."""
    capacity = cfg.capacity
    paths = cfg.queue_files()
    queues = [storage.load_queue(path, capacity) for path in paths]
    log.debug(f"Loaded queues: {', '.join(str(q) for q in queues)}")

    command(queues, args.args, cfg)

    for queue, path in zip(queues, paths):
        storage.save_queue(queue, path)


def display_or_edit_config(args, cfg):
    """Print out the value in the config or update it"""
    key = args.args[0] if len(args.args) > 0 else None
    value = args.args[1] if len(args.args) > 1 else None

    # If no key is specified, print out the entire config
    if key is None:
        print(f"Configuration file location: {cfg.config_file}\n")
        cfg.display()
        return

    # Construct a path from the key specification
    path = key.split(".")

    # Delete the key if --delete is specified
    if args.delete:
        del cfg[path]
        cfg.commit()
        return

    # If no value is specified, print out the value at the path
    if value is None:
        res = cfg[path]
        if isinstance(res, dict):
            print(toml.dumps(res))
        else:
            print(res)
        return

    # Update the path with the provided value
    val = int(value) if value.isdigit() else value
    # create configuration if it doesn't exist
    if path not in cfg:
        # Don't create a new field unless --create is specified
        if not args.create:
            raise errors.RingqError(
                f"Path `{'.'.join(path)}' does not exist. Provide the --create flag if "
                " you meant to create a new field instead of updating an existing one."
            )
        cfg[path] = val
    elif not isinstance(cfg[path], (list, dict)):
        cfg[path] = val
    else:
        raise errors.RingqError(
            f"Cannot update `{'.'.join(path)}'. Edit the configuration file"
            f" `{cfg.config_file}' manually instead."
        )
    cfg.commit()


def build_parser():
    parser = argparse.ArgumentParser(
        prog="ringq",
        description="Manage two fixed-capacity queues of unsigned 32-bit integers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Enable verbose logging"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only report errors"
    )
    parser.add_argument(
        "-s",
        "--set",
        help="Override configuration key-value pairs for this run",
        nargs=2,
        metavar=("key", "value"),
        dest="dynamic_config",
        action="append",
    )
    parser.add_argument(
        "--dir",
        dest="directory",
        help="Directory holding the queue files (overrides storage.directory)",
    )

    config_group = parser.add_argument_group("config command")
    config_group.add_argument(
        "-d", "--delete", help="Remove key from config.", action="store_true"
    )
    config_group.add_argument(
        "-c", "--create", help="Create key in config.", action="store_true"
    )

    parser.add_argument(
        "command", nargs="?", help="Command code (0x00-0x06), its name, or `config'"
    )
    parser.add_argument("args", nargs="*", help="Arguments of the command")
    return parser


def main(argv=None):
    """Builds the command line argument parser,
    parses the arguments, and runs the selected command."""

    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    # Setup logging
    utils.logging_setup(args)

    try:
        cfg = Configuration()

        if args.command == "config":
            display_or_edit_config(args, cfg)
            return

        # update the config with arguments provided via cmdline
        if args.dynamic_config is not None:
            cfg.update_all(
                {tuple(key.split(".")): value for key, value in args.dynamic_config}
            )
        if args.directory is not None:
            cfg[["storage", "directory"]] = args.directory

        registry = Registry()
        register_commands(registry)
        parser.epilog = help_epilog(registry, cfg)

        if args.command is None:
            parser.print_help()
            exit(1)

        try:
            command = registry.lookup(args.command)
        except errors.UnknownCommand as e:
            log.error(e)
            parser.print_help()
            exit(1)

        log.info(f"Running `{command.name}' with arguments {args.args}")
        run_command(command, args, cfg)

    except errors.RingqError as e:
        log.error(e)
        exit(1)
