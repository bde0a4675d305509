from typing import List

import appdirs  # type: ignore
import copy
import toml
import sys
import logging as log
from pathlib import Path

from . import errors
from .queue import DEFAULT_CAPACITY

# Operation modes of the `dequeue` command.
MODE_FIFO = "fifo"
MODE_LIFO = "lifo"
MODES = (MODE_FIFO, MODE_LIFO)

DEFAULT_CONFIGURATION = {
    "queue": {
        "capacity": DEFAULT_CAPACITY,
        "mode": MODE_FIFO,
    },
    "storage": {
        "directory": ".",
        "files": [".queue1", ".queue2"],
    },
}


class DynamicDict:
    """Dynamically get/set nested dictionary keys of 'data' dict"""

    def __init__(self, data: dict):
        self.data = data

    def __getitem__(self, keys):
        if isinstance(keys, str):
            keys = (keys,)

        data = self.data
        for k in keys:
            data = data[k]
        return data

    def __setitem__(self, keys, val):
        if isinstance(keys, str):
            keys = (keys,)

        data = self.data
        lastkey = keys[-1]
        for i, k in enumerate(keys[:-1]):  # drill down to *second* last key
            # if key exists, drill down
            if k in data:
                data = data[k]
                if not isinstance(data, dict):
                    raise errors.InvalidConfiguration(
                        keys[: i + 1], data, "is not a table and has no keys"
                    )
            # else make a new empty dictionary, then drill down
            else:
                data[k] = {}
                data = data[k]
        data[lastkey] = val

    def __delitem__(self, keys):
        if isinstance(keys, str):
            keys = (keys,)

        if keys not in self:
            log.warning(f"`{'.'.join(keys)}' not found. Ignoring delete command.")
            return

        data = self.data
        for k in keys[:-1]:  # drill down to *second* last key
            data = data[k]
        del data[keys[-1]]

    def __contains__(self, keys):
        if isinstance(keys, str):
            keys = (keys,)

        data = self.data
        for k in keys:
            if isinstance(data, dict) and k in data:
                data = data[k]
            else:
                return False
        return True


class Configuration:
    """
    Wraps the configuration file and provides methods for committing
    data, displaying configuration data and accessing data.

    Schema:
        The configuration file is serialized as a TOML file and contains the
        following data fields:

        1. queue.capacity: Maximum number of elements in each queue.
        2. queue.mode: Which end `dequeue` pops from. `fifo` pops the oldest
           element, `lifo` the newest one.
        3. storage.directory: Directory holding the queue files.
        4. storage.files: Names of the files for the first and second queue.
    """

    def __init__(self, config_file=None):
        """Find the configuration file."""
        if config_file is None:
            self.path = Path(appdirs.user_config_dir("ringq"))
            if not self.path.parent.exists():
                log.warning(f"{self.path.parent} doesn't exist. Creating it.")
            self.path.mkdir(parents=True, exist_ok=True)
            self.config_file = self.path / "config.toml"
        else:
            self.config_file = Path(config_file)
            self.path = self.config_file.parent

        if not self.config_file.exists():
            self.config_file.touch()

        # load the configuration file
        self.config = DynamicDict(toml.load(self.config_file))
        # the defaults are copied so that edits never leak into them
        self.fill_missing(copy.deepcopy(DEFAULT_CONFIGURATION), self.config.data)

    def commit(self):
        """
        Commit the current configuration to a file.
        """
        with self.config_file.open("w") as f:
            toml.dump(self.config.data, f)

    def display(self):
        """
        Display the current configuration.
        """
        toml.dump(self.config.data, sys.stdout)

    def fill_missing(self, default, config):
        """
        Add keys that are defined in the default config but not in
        the user provided config.
        """
        if isinstance(default, dict):
            # go over all the keys in the default
            for key in default.keys():
                # if the key is not in the config, add it
                if key not in config:
                    config[key] = default[key]
                else:
                    config[key] = self.fill_missing(default[key], config[key])
        return config

    @property
    def capacity(self) -> int:
        path = ["queue", "capacity"]
        capacity = self[path]
        if isinstance(capacity, str) and capacity.isdigit():
            capacity = int(capacity)
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise errors.InvalidConfiguration(
                path, capacity, "expected a positive integer"
            )
        return capacity

    @property
    def mode(self) -> str:
        path = ["queue", "mode"]
        mode = self[path]
        if not isinstance(mode, str) or mode.lower() not in MODES:
            raise errors.InvalidConfiguration(
                path, mode, f"expected one of {', '.join(MODES)}"
            )
        return mode.lower()

    def queue_files(self) -> List[Path]:
        """
        Paths of the files that store the first and second queue.
        """
        path = ["storage", "files"]
        files = self[path]
        if not isinstance(files, list) or len(files) != 2:
            raise errors.InvalidConfiguration(
                path, files, "expected a list of two file names"
            )
        directory = Path(self[["storage", "directory"]]).expanduser()
        return [directory / name for name in files]

    def update_all(self, dict):
        for key, value in dict.items():
            self.config[key] = value

    def __getitem__(self, keys):
        try:
            return self.config[keys]
        except (KeyError, TypeError):
            raise errors.UnsetConfiguration(keys)

    def __setitem__(self, keys, val):
        self.config[keys] = val

    def __delitem__(self, keys):
        del self.config[keys]

    def __contains__(self, keys):
        return keys in self.config
