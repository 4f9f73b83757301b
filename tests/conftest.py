#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import pytest

from usb_ids import config
from usb_ids.database import reset_database

SAMPLE = """\
#
# Version: 2024.01.01
# Date:    2024-01-01 10:00:00
#

# Vendors, devices and interfaces
0001  Vendor One
\t0001  Device One
\t\t00  Interface Zero
\t\t01  Interface One
\t0002  Device Two
0002  Vendor Two

# Classes
C 03  Human Interface Device
\t01  Boot Interface Subclass
\t\t01  Keyboard
C ff  Vendor Specific Class
\tff  Vendor Specific Subclass
\t\tff  Vendor Specific Protocol

AT 0101  USB Streaming
HUT 01  Generic Desktop Controls
\t002  Mouse
L 0009  English
\t01  US
"""


@pytest.fixture(autouse=True)
def clean_database(monkeypatch):
    monkeypatch.delenv(config.PATH_ENV, raising=False)
    monkeypatch.delenv(config.PREFER_SYSTEM_ENV, raising=False)
    reset_database()
    yield
    reset_database()


@pytest.fixture
def sample_path(tmp_path):
    path = tmp_path / "usb.ids"
    path.write_text(SAMPLE)
    return path
