#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
Location of the USB ID database.

By default the usb.ids file bundled with the package is used. The environment
can change this:

* `USB_IDS_PATH`: explicit path to a usb.ids file
* `USB_IDS_PREFER_SYSTEM`: when true, prefer a usb.ids file provided by the
  system (ex: hwdata or usbutils packages) over the bundled one
"""

import os
import pathlib

from .types import Iterator, Optional

DATA_PATH = pathlib.Path(__file__).parent / "data"
BUNDLED_PATH = DATA_PATH / "usb.ids"

SYSTEM_PATHS = (
    pathlib.Path("/usr/share/hwdata/usb.ids"),
    pathlib.Path("/usr/share/misc/usb.ids"),
    pathlib.Path("/usr/share/usb.ids"),
    pathlib.Path("/var/lib/usbutils/usb.ids"),
)

PATH_ENV = "USB_IDS_PATH"
PREFER_SYSTEM_ENV = "USB_IDS_PREFER_SYSTEM"

TRUE_VALUES = {"1", "true", "yes", "on"}


def env_path() -> Optional[pathlib.Path]:
    path = os.getenv(PATH_ENV)
    return pathlib.Path(path).expanduser() if path else None


def prefer_system() -> bool:
    return os.getenv(PREFER_SYSTEM_ENV, "").strip().lower() in TRUE_VALUES


def iter_candidate_paths() -> Iterator[pathlib.Path]:
    """Candidate usb.ids paths, in order of preference"""
    if prefer_system():
        yield from SYSTEM_PATHS
    yield BUNDLED_PATH


def find_path() -> pathlib.Path:
    """
    Find the usb.ids file to load.

    An explicit path given by the environment must exist. Otherwise the
    first existing candidate is returned.

    Raises:
    FileNotFoundError if no usb.ids file could be found
    """
    path = env_path()
    if path is not None:
        if not path.is_file():
            raise FileNotFoundError(f"{PATH_ENV} points to a missing file: {path}")
        return path
    candidates = tuple(iter_candidate_paths())
    for path in candidates:
        if path.is_file():
            return path
    searched = ", ".join(str(path) for path in candidates)
    raise FileNotFoundError(f"Could not find usb.ids (searched: {searched})")
