#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
Compile a usb.ids file into a python module.

The generated module holds plain dict literals and can be turned back into
a database with:

```python
from usb_ids.database import Database
import my_usb_ids

db = Database.from_dict(my_usb_ids.TABLES, my_usb_ids.VERSION, my_usb_ids.DATE)
```
"""

import datetime
import logging
import pathlib

import black

from .base import SECTION_CLASS, Section
from .database import Database
from .types import Optional, PathLike

log = logging.getLogger(__name__)

TEMPLATE = """\
#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

# This file has been generated by {name}
# Date: {date}
# Source: {source}

VERSION = {version!r}

DATE = {db_date!r}

TABLES = {{
{tables}
}}
"""


def entity_text(klass, eid: int, data: dict) -> str:
    text = f'0x{eid:0{klass.WIDTH}x}: {{"name": {data["name"]!r}'
    children = data.get("children")
    if children is not None:
        items = ", ".join(entity_text(klass.CHILD, cid, child) for cid, child in children.items())
        text += f', "children": {{{items}}}'
    return text + "}"


def table_text(section: Section, table: dict) -> str:
    klass = SECTION_CLASS[section]
    items = ",\n".join(entity_text(klass, eid, data) for eid, data in table.items())
    return f'"{section.value}": {{\n{items}\n}},'


def module_text(db: Database, name: str = __name__) -> str:
    data = db.to_dict()
    tables = "\n".join(table_text(section, data[section.value]) for section in Section)
    fields = {
        "name": name,
        "date": datetime.datetime.now(),
        "source": db.source,
        "version": db.version,
        "db_date": db.date,
        "tables": tables,
    }
    text = TEMPLATE.format(**fields)
    log.info("  Applying black...")
    return black.format_str(text, mode=black.FileMode())


def run(source: PathLike, output: Optional[PathLike] = None) -> str:
    """
    Generate a python module from the given usb.ids file. Write it to output
    if given or print it otherwise. Returns the module text.
    """
    log.info("Starting codegen from %s...", source)
    text = module_text(Database.from_file(source))
    if output is None:
        print(text)
    else:
        output = pathlib.Path(output)
        log.info("  Writing %s...", output)
        with output.open("w") as fobj:
            print(text, file=fobj)
    log.info("Finished codegen!")
    return text
