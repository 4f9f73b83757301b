#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
Entities of the USB ID database.

Every entity has an integer `id` and a `name`. Entities with nested entries
(ex: a Vendor has Devices) are dictionaries of their children indexed by
child id. Every child keeps a reference to its `parent`.

Lookups never fail for unknown ids: they return None.

```python
>>> from usb_ids import Device
>>> device = Device.from_vid_pid(0x1d6b, 0x0003)
>>> device.name
'3.0 root hub'
>>> device.vendor.name
'Linux Foundation'
>>> Device.from_vid_pid(0x1d6b, 0xfffe) is None
True
```
"""

import enum
import logging

from .types import Iterator, Optional, VidPid
from .util import make_find

log = logging.getLogger(__name__)


class Section(enum.Enum):
    VENDORS = "vendors"
    CLASSES = "classes"
    AUDIO_TERMINALS = "audio_terminals"
    HID_DESCRIPTORS = "hid_descriptors"
    HID_ITEMS = "hid_items"
    BIASES = "biases"
    PHYSICALS = "physicals"
    HUT_PAGES = "hut_pages"
    LANGUAGES = "languages"
    COUNTRIES = "countries"
    VIDEO_TERMINALS = "video_terminals"


def get_table(section: Section) -> dict:
    from .database import get_database

    return get_database().tables[section]


class Entity:
    __slots__ = ()

    # display width of the id in hexadecimal digits
    WIDTH = 2
    # regular expression quantifier for the id hexadecimal digits
    DIGITS = "{2}"
    CHILD = None

    @property
    def key(self) -> tuple[int, ...]:
        """Ids from the top level entity down to this one"""
        if self.parent is None:
            return (self.id,)
        return (*self.parent.key, self.id)

    @property
    def hex_id(self) -> str:
        return f"{self.id:0{self.WIDTH}x}"

    def _same_children(self, other) -> bool:
        return True

    def __eq__(self, other):
        if type(self) is not type(other):
            return False
        return self.key == other.key and self.name == other.name and self._same_children(other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, self.key))

    def __repr__(self):
        return f"{type(self).__name__}(0x{self.hex_id}, {self.name!r})"

    def __str__(self):
        return self.name


class Node(Entity, dict):
    def __init__(self, nid: int, name: str, parent=None):
        super().__init__()
        self.id = nid
        self.name = name
        self.parent = parent

    def __bool__(self):
        return True

    def _same_children(self, other) -> bool:
        return dict.__eq__(self, other)

    def add(self, child):
        """Add a child entity (replacing any previous child with the same id)"""
        previous = self.get(child.id)
        if previous is not None:
            log.warning("%r: %r replaces %r", self, child, previous)
        child.parent = self
        self[child.id] = child
        return child


class Leaf(Entity):
    __slots__ = ["id", "name", "parent"]

    def __init__(self, lid: int, name: str, parent=None):
        self.id = lid
        self.name = name
        self.parent = parent


class TopLevel:
    """Mixin for entities stored directly in one of the database tables"""

    __slots__ = ()

    TABLE: Section = None
    PREFIX: str = None

    @classmethod
    def from_id(cls, eid: int):
        """Returns the entity with the given id or None if no such entity exists"""
        return get_table(cls.TABLE).get(eid)

    @classmethod
    def iter(cls) -> Iterator:
        """Iterate over all entities of this type in the database"""
        return iter(get_table(cls.TABLE).values())


# Vendors, devices and interfaces


class Interface(Leaf):
    """
    An interface of a device.

    The registry is not an authoritative source of interface information.
    Users who need the interfaces of a device should query the device itself.
    """

    __slots__ = ()

    @property
    def device(self) -> "Device":
        return self.parent

    @classmethod
    def from_vid_pid_iid(cls, vid: int, pid: int, iid: int) -> Optional["Interface"]:
        device = Device.from_vid_pid(vid, pid)
        return None if device is None else device.get(iid)


class Device(Node):
    """A device (aka product) of a vendor"""

    WIDTH = 4
    DIGITS = "{4}"
    CHILD = Interface

    @classmethod
    def from_vid_pid(cls, vid: int, pid: int) -> Optional["Device"]:
        """
        Returns the device corresponding to the given vendor and product ids
        or None if no such device exists in the database
        """
        vendor = Vendor.from_id(vid)
        return None if vendor is None else vendor.get(pid)

    @property
    def vendor(self) -> "Vendor":
        return self.parent

    @property
    def vendor_id(self) -> int:
        return self.parent.id

    def as_vid_pid(self) -> VidPid:
        """(vendor id, product id) of this device"""
        return self.parent.id, self.id

    @property
    def interfaces(self) -> Iterator[Interface]:
        return iter(self.values())


class Vendor(TopLevel, Node):
    TABLE = Section.VENDORS
    PREFIX = ""
    WIDTH = 4
    DIGITS = "{4}"
    CHILD = Device

    @property
    def devices(self) -> Iterator[Device]:
        return iter(self.values())


# Device classes, subclasses and protocols


class Protocol(Leaf):
    __slots__ = ()

    @property
    def subclass(self) -> "SubClass":
        return self.parent

    @classmethod
    def from_cid_scid_pid(cls, class_id: int, subclass_id: int, pid: int) -> Optional["Protocol"]:
        subclass = SubClass.from_cid_scid(class_id, subclass_id)
        return None if subclass is None else subclass.get(pid)


class SubClass(Node):
    CHILD = Protocol

    @classmethod
    def from_cid_scid(cls, class_id: int, subclass_id: int) -> Optional["SubClass"]:
        klass = Class.from_id(class_id)
        return None if klass is None else klass.get(subclass_id)

    @property
    def klass(self) -> "Class":
        return self.parent

    @property
    def class_id(self) -> int:
        return self.parent.id

    def as_cid_scid(self) -> tuple[int, int]:
        """(class id, subclass id) of this subclass"""
        return self.parent.id, self.id

    @property
    def protocols(self) -> Iterator[Protocol]:
        return iter(self.values())


class Class(TopLevel, Node):
    TABLE = Section.CLASSES
    PREFIX = "C"
    CHILD = SubClass

    @property
    def sub_classes(self) -> Iterator[SubClass]:
        return iter(self.values())


# Secondary tables


class AudioTerminal(TopLevel, Leaf):
    __slots__ = ()
    TABLE = Section.AUDIO_TERMINALS
    PREFIX = "AT"
    WIDTH = 4
    DIGITS = "{1,4}"


class HIDDescriptor(TopLevel, Leaf):
    __slots__ = ()
    TABLE = Section.HID_DESCRIPTORS
    PREFIX = "HID"
    DIGITS = "{1,2}"


class HIDItem(TopLevel, Leaf):
    __slots__ = ()
    TABLE = Section.HID_ITEMS
    PREFIX = "R"
    DIGITS = "{1,2}"


class Bias(TopLevel, Leaf):
    __slots__ = ()
    TABLE = Section.BIASES
    PREFIX = "BIAS"
    WIDTH = 1
    DIGITS = "{1,2}"


class Physical(TopLevel, Leaf):
    __slots__ = ()
    TABLE = Section.PHYSICALS
    PREFIX = "PHY"
    DIGITS = "{1,2}"


class Usage(Leaf):
    __slots__ = ()
    WIDTH = 3
    DIGITS = "{1,4}"

    @property
    def page(self) -> "HUTPage":
        return self.parent

    @classmethod
    def from_page_usage(cls, page_id: int, usage_id: int) -> Optional["Usage"]:
        page = HUTPage.from_id(page_id)
        return None if page is None else page.get(usage_id)


class HUTPage(TopLevel, Node):
    """A HID usage table page"""

    TABLE = Section.HUT_PAGES
    PREFIX = "HUT"
    DIGITS = "{1,4}"
    CHILD = Usage

    @property
    def usages(self) -> Iterator[Usage]:
        return iter(self.values())


class Dialect(Leaf):
    __slots__ = ()
    DIGITS = "{1,2}"

    @property
    def language(self) -> "Language":
        return self.parent

    @classmethod
    def from_lid_did(cls, language_id: int, dialect_id: int) -> Optional["Dialect"]:
        language = Language.from_id(language_id)
        return None if language is None else language.get(dialect_id)


class Language(TopLevel, Node):
    TABLE = Section.LANGUAGES
    PREFIX = "L"
    WIDTH = 4
    DIGITS = "{1,4}"
    CHILD = Dialect

    @property
    def dialects(self) -> Iterator[Dialect]:
        return iter(self.values())


class Country(TopLevel, Leaf):
    """A HID descriptor country code"""

    __slots__ = ()
    TABLE = Section.COUNTRIES
    PREFIX = "HCC"
    DIGITS = "{1,2}"


class VideoTerminal(TopLevel, Leaf):
    __slots__ = ()
    TABLE = Section.VIDEO_TERMINALS
    PREFIX = "VT"
    WIDTH = 4
    DIGITS = "{1,4}"


TOP_LEVEL = (
    Vendor,
    Class,
    AudioTerminal,
    HIDDescriptor,
    HIDItem,
    Bias,
    Physical,
    HUTPage,
    Language,
    Country,
    VideoTerminal,
)

SECTION_CLASS = {klass.TABLE: klass for klass in TOP_LEVEL}


def iter_vendors() -> Iterator[Vendor]:
    return Vendor.iter()


def iter_devices() -> Iterator[Device]:
    for vendor in Vendor.iter():
        yield from vendor.devices


def iter_classes() -> Iterator[Class]:
    return Class.iter()


find_vendor = make_find(iter_vendors)
find_device = make_find(iter_devices)


def _name(entity) -> str:
    return "" if entity is None else entity.name


def get_vendor_name(vendor_id: int) -> str:
    return _name(Vendor.from_id(vendor_id))


def get_device_name(vendor_id: int, product_id: int) -> str:
    return _name(Device.from_vid_pid(vendor_id, product_id))


def get_class_name(class_id: int) -> str:
    return _name(Class.from_id(class_id))


def get_subclass_name(class_id: int, subclass_id: int) -> str:
    return _name(SubClass.from_cid_scid(class_id, subclass_id))


def get_protocol_name(class_id: int, subclass_id: int, protocol_id: int) -> str:
    return _name(Protocol.from_cid_scid_pid(class_id, subclass_id, protocol_id))
