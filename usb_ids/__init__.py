#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""Python access to the USB ID Repository (http://www.linux-usb.org/usb-ids.html)"""

from .base import (
    AudioTerminal,
    Bias,
    Class,
    Country,
    Device,
    Dialect,
    HIDDescriptor,
    HIDItem,
    HUTPage,
    Interface,
    Language,
    Physical,
    Protocol,
    SubClass,
    Usage,
    Vendor,
    VideoTerminal,
    find_device,
    find_vendor,
    get_class_name,
    get_device_name,
    get_protocol_name,
    get_subclass_name,
    get_vendor_name,
    iter_classes,
    iter_devices,
    iter_vendors,
)
from .database import Database, get_database, reset_database, set_database
from .parser import ParseError

__version__ = "1.2019.11"
