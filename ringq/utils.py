import sys
import logging as log


def logging_setup(args):
    # Color for warning, error, and info messages.
    log.addLevelName(log.INFO, "\033[1;34m%s\033[1;0m" % "INFO")
    log.addLevelName(log.WARNING, "\033[1;33m%s\033[1;0m" % "WARNING")
    log.addLevelName(log.ERROR, "\033[1;31m%s\033[1;0m" % "ERROR")

    # Set verbosity level.
    level = None
    if "quiet" in args and args.quiet:
        level = log.ERROR
    elif "verbose" not in args or args.verbose == 0:
        level = log.WARNING
    elif args.verbose == 1:
        level = log.INFO
    elif args.verbose >= 2:
        level = log.DEBUG

    log.basicConfig(
        format="[ringq] %(levelname)s: %(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )
