#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
Parser for the usb.ids text format.

It is really a line matcher with a small amount of context needed to pair
nested entries (ex: devices) with their parents (ex: vendors):

```
# comment
vendor  vendor_name
<TAB>device  device_name
<TAB><TAB>interface  interface_name
C class  class_name
<TAB>subclass  subclass_name
<TAB><TAB>protocol  protocol_name
AT terminal_type  terminal_type_name
HUT page  page_name
<TAB>usage  usage_name
L language  language_name
<TAB>dialect  dialect_name
...
```

Top level lines are identified by their prefix (vendors have none). The
meaning of indented lines depends on the last top level line.
"""

import logging
import re

from .base import TOP_LEVEL, Vendor
from .types import Iterable, Optional, PathLike, Self
from .util import int16, iter_lines

log = logging.getLogger(__name__)

VERSION_RE = re.compile(r"#\s*Version:\s*(?P<value>.+?)\s*$")
DATE_RE = re.compile(r"#\s*Date:\s*(?P<value>.+?)\s*$")


class ParseError(ValueError):
    """Malformed usb.ids content"""

    def __init__(self, message: str, lineno: int, line: str):
        super().__init__(f"line {lineno}: {message}: {line!r}")
        self.lineno = lineno
        self.line = line


def entry_re(klass, prefix: str = "") -> re.Pattern:
    return re.compile(rf"{prefix}(?P<id>[0-9a-fA-F]{klass.DIGITS})  (?P<name>.*)")


def _grammar(klass):
    prefix = f"{klass.PREFIX} " if klass.PREFIX else ""
    child = klass.CHILD
    grand_child = None if child is None else child.CHILD
    return (
        (klass, entry_re(klass, prefix)),
        None if child is None else (child, entry_re(child, "\t")),
        None if grand_child is None else (grand_child, entry_re(grand_child, "\t\t")),
    )


# prefix -> (top level, child, grand child) where each is (class, regular expression)
GRAMMAR = {klass.PREFIX: _grammar(klass) for klass in TOP_LEVEL}


def _match(rule, line):
    if rule is None:
        return None
    klass, regex = rule
    match = regex.fullmatch(line)
    if match is None:
        return None
    return klass(int16(match["id"]), match["name"])


class Parser:
    """
    Incremental usb.ids parser. Feed it lines and collect the top level
    entities from the tables attribute.
    """

    def __init__(self):
        self.tables = {klass.TABLE: {} for klass in TOP_LEVEL}
        self.version: Optional[str] = None
        self.date: Optional[str] = None
        self.lineno = 0
        self._grammar = None
        self._top = None
        self._child = None
        self._skipping = False

    def _header(self, line: str):
        if self.version is None and (match := VERSION_RE.match(line)):
            self.version = match["value"]
        elif self.date is None and (match := DATE_RE.match(line)):
            self.date = match["value"]

    def _top_level(self, line: str):
        prefix = line.split(" ", 1)[0]
        grammar = GRAMMAR.get(prefix, GRAMMAR[Vendor.PREFIX])
        entity = _match(grammar[0], line)
        self._child = None
        self._skipping = entity is None
        if entity is None:
            # nested lines of an unknown top level line are skipped too
            log.debug("line %d: skipped %r", self.lineno, line)
            self._grammar, self._top = None, None
            return
        self._grammar, self._top = grammar, entity
        table = self.tables[entity.TABLE]
        previous = table.get(entity.id)
        if previous is not None:
            log.warning("line %d: %r replaces %r", self.lineno, entity, previous)
        table[entity.id] = entity

    def _nested(self, line: str, level: int):
        if self._skipping:
            log.debug("line %d: skipped %r", self.lineno, line)
            return
        if self._top is None:
            raise ParseError("nested entry without parent", self.lineno, line)
        entity = _match(self._grammar[level], line)
        if entity is None:
            log.debug("line %d: skipped %r", self.lineno, line)
            return
        if level == 1:
            self._child = self._top.add(entity)
        elif self._child is None:
            raise ParseError(f"{type(entity).__name__} without parent", self.lineno, line)
        else:
            self._child.add(entity)

    def feed(self, line: str):
        """Process a single line (with or without line terminator)"""
        self.lineno += 1
        line = line.rstrip("\r\n")
        if not line.strip():
            return
        if line.startswith("#"):
            self._header(line)
        elif line.startswith("\t\t"):
            self._nested(line, 2)
        elif line.startswith("\t"):
            self._nested(line, 1)
        else:
            self._top_level(line)

    def feed_lines(self, lines: Iterable[str]) -> Self:
        for line in lines:
            self.feed(line)
        return self


def parse_lines(lines: Iterable[str]) -> Parser:
    """Parse the given text lines"""
    return Parser().feed_lines(lines)


def parse_file(filename: PathLike) -> Parser:
    """Parse the given usb.ids file"""
    return parse_lines(iter_lines(filename))
