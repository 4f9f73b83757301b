#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import argparse
import logging

from usb_ids import codegen, config
from usb_ids.base import Class, Device, Protocol, SubClass, Vendor, find_device, find_vendor
from usb_ids.database import get_database, set_database
from usb_ids.util import split_ids


def entity_line(entity, indent=0) -> str:
    return f"{indent * '  '}{entity.hex_id}  {entity.name}"


def not_found(kind, ids) -> int:
    text = ":".join(f"{i:x}" for i in ids)
    print(f"{kind} {text} not found")
    return 1


def device(args):
    vid, pid = args.ids
    dev = Device.from_vid_pid(vid, pid)
    if dev is None:
        return not_found("device", args.ids)
    print(entity_line(dev.vendor))
    print(entity_line(dev, 1))
    for interface in dev.interfaces:
        print(entity_line(interface, 2))
    return 0


def vendor(args):
    (vid,) = args.ids
    ven = Vendor.from_id(vid)
    if ven is None:
        return not_found("vendor", args.ids)
    print(entity_line(ven))
    for dev in ven.devices:
        print(entity_line(dev, 1))
    return 0


def klass(args):
    ids = args.ids
    if len(ids) == 1:
        entity = Class.from_id(*ids)
    elif len(ids) == 2:
        entity = SubClass.from_cid_scid(*ids)
    else:
        entity = Protocol.from_cid_scid_pid(*ids)
    if entity is None:
        return not_found("class", ids)
    path = [entity]
    while path[0].parent is not None:
        path.insert(0, path[0].parent)
    for indent, item in enumerate(path):
        print(entity_line(item, indent))
    if len(ids) < 3:
        for child in entity.values():
            print(entity_line(child, len(ids)))
    return 0


def ls(args):
    entities = get_database().classes if args.classes else get_database().vendors
    for entity in entities.values():
        print(entity_line(entity))
    return 0


def search(args):
    text = args.text.lower()

    def match(entity):
        return text in entity.name.lower()

    for ven in find_vendor(find_all=True, custom_match=match):
        print(f"{ven.hex_id}       {ven.name}")
    for dev in find_device(find_all=True, custom_match=match):
        print(f"{dev.vendor.hex_id}:{dev.hex_id}  {dev.vendor.name} {dev.name}")
    return 0


def info(args):
    db = get_database()
    print(f"source   {db.source}")
    print(f"version  {db.version or '-'}")
    print(f"date     {db.date or '-'}")
    for section, size in db.sizes().items():
        print(f"{section.value:<16} {size:>6}")
    return 0


def generate(args):
    codegen.run(args.db or config.find_path(), args.output)
    return 0


def ids_type(nb):
    def hex_ids(text):
        ids = split_ids(text)
        if len(ids) not in nb:
            raise ValueError(f"expected {' or '.join(map(str, sorted(nb)))} ids")
        return ids

    return hex_ids


def cli():
    parser = argparse.ArgumentParser(prog="usb-ids", description="USB ID database lookup")
    parser.add_argument("--db", help="usb.ids file to use (default: bundled or USB_IDS_PATH)")
    parser.add_argument(
        "--log-level", choices=["debug", "info", "warning", "error"], default="warning", help="log level"
    )
    sub_parsers = parser.add_subparsers(
        title="sub-commands", description="valid sub-commands", help="select one command", required=True, dest="command"
    )
    dev = sub_parsers.add_parser("device", aliases=["dev"], help="show device")
    dev.add_argument("ids", help="VID:PID (hexadecimal)", type=ids_type({2}))
    ven = sub_parsers.add_parser("vendor", aliases=["ven"], help="show vendor and its devices")
    ven.add_argument("ids", help="VID (hexadecimal)", type=ids_type({1}))
    kls = sub_parsers.add_parser("class", help="show class, subclass or protocol")
    kls.add_argument("ids", help="CLASS[:SUBCLASS[:PROTOCOL]] (hexadecimal)", type=ids_type({1, 2, 3}))
    lst = sub_parsers.add_parser("ls", help="list vendors")
    lst.add_argument("--classes", action="store_true", help="list classes instead of vendors")
    srch = sub_parsers.add_parser("search", help="search vendors and devices by name")
    srch.add_argument("text", help="case insensitive text")
    sub_parsers.add_parser("info", help="show database information")
    gen = sub_parsers.add_parser("codegen", help="compile the database into a python module")
    gen.add_argument("output", nargs="?", default=None, help="output file (default: stdout)")
    return parser


COMMANDS = {
    "device": device,
    "dev": device,
    "vendor": vendor,
    "ven": vendor,
    "class": klass,
    "ls": ls,
    "search": search,
    "info": info,
    "codegen": generate,
}


def run(args):
    return COMMANDS[args.command](args)


def main(args=None):
    parser = cli()
    args = parser.parse_args(args=args)
    logging.basicConfig(level=args.log_level.upper())
    try:
        # codegen parses its own source
        if args.db and args.command != "codegen":
            set_database(args.db)
        return run(args)
    except FileNotFoundError as error:
        parser.error(str(error))


if __name__ == "__main__":
    raise SystemExit(main())
