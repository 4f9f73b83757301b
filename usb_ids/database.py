#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
In memory USB ID database.

The default database is loaded on first use from the usb.ids file selected
by `usb_ids.config` and kept for the lifetime of the process.
"""

import functools
import logging
import pathlib

from . import config
from .base import SECTION_CLASS, Section
from .parser import parse_file, parse_lines
from .types import Iterable, Mapping, Optional, PathLike, Union

log = logging.getLogger(__name__)


def _entity_to_dict(entity) -> dict:
    result = {"name": entity.name}
    if entity.CHILD is not None:
        result["children"] = {cid: _entity_to_dict(child) for cid, child in entity.items()}
    return result


def _entity_from_dict(klass, eid: int, data: Mapping):
    entity = klass(eid, data["name"])
    for cid, child in data.get("children", {}).items():
        entity.add(_entity_from_dict(klass.CHILD, cid, child))
    return entity


class Database:
    """Tables of top level entities (vendors, classes, ...) indexed by id"""

    def __init__(
        self,
        tables: Optional[dict] = None,
        version: Optional[str] = None,
        date: Optional[str] = None,
        source: Optional[str] = None,
    ):
        self.tables = {section: {} for section in Section}
        if tables:
            self.tables.update(tables)
        self.version = version
        self.date = date
        self.source = source

    def __repr__(self):
        return f"<{type(self).__name__} version={self.version} vendors={len(self.vendors)} classes={len(self.classes)}>"

    @property
    def vendors(self) -> dict:
        return self.tables[Section.VENDORS]

    @property
    def classes(self) -> dict:
        return self.tables[Section.CLASSES]

    def sizes(self) -> dict[Section, int]:
        """Number of top level entities per table"""
        return {section: len(table) for section, table in self.tables.items()}

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: Optional[str] = None):
        parser = parse_lines(lines)
        return cls(parser.tables, parser.version, parser.date, source)

    @classmethod
    def from_file(cls, filename: PathLike):
        filename = pathlib.Path(filename)
        log.info("Loading USB ID database from %s", filename)
        parser = parse_file(filename)
        db = cls(parser.tables, parser.version, parser.date, str(filename))
        log.info("Loaded %r", db)
        return db

    def to_dict(self) -> dict:
        """
        Plain dict version of the tables indexed by table name:
        `{"vendors": {0x1d6b: {"name": "Linux Foundation", "children": {...}}}, ...}`
        """
        return {
            section.value: {eid: _entity_to_dict(entity) for eid, entity in table.items()}
            for section, table in self.tables.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping, version: Optional[str] = None, date: Optional[str] = None, source=None):
        """Build a database from the result of to_dict()"""
        tables = {}
        for name, table in data.items():
            section = Section(name)
            klass = SECTION_CLASS[section]
            tables[section] = {eid: _entity_from_dict(klass, eid, item) for eid, item in table.items()}
        return cls(tables, version, date, source)


_database: Optional[Database] = None


@functools.cache
def default_database() -> Database:
    return Database.from_file(config.find_path())


def get_database() -> Database:
    """The database used by the lookup functions"""
    if _database is not None:
        return _database
    return default_database()


def set_database(db: Union[Database, PathLike]) -> Database:
    """Replace the database used by the lookup functions with a database or a usb.ids file"""
    global _database
    if not isinstance(db, Database):
        db = Database.from_file(db)
    _database = db
    return db


def reset_database():
    """Forget any database set or loaded so far. Next lookup loads the default one"""
    global _database
    _database = None
    default_database.cache_clear()
