#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""Utility functions used by the library. Mostly for internal usage"""

import functools

from .types import Callable, Iterable, Iterator, PathLike

int16 = functools.partial(int, base=16)


def split_ids(text: str, max_parts: int = 3) -> tuple[int, ...]:
    """
    Split a colon separated hexadecimal id text into a tuple of ints.

    Example: split_ids("1d6b:0003") gives (0x1d6b, 0x3)

    Raises:
    ValueError if any part is not hexadecimal or there are too many parts
    """
    parts = text.split(":")
    if len(parts) > max_parts:
        raise ValueError(f"Expected at most {max_parts} ids, got {len(parts)} in {text!r}")
    return tuple(int16(part) for part in parts)


def iter_lines(filename: PathLike) -> Iterator[str]:
    """Text lines of the given file without line terminators. Undecodable bytes are replaced"""
    with open(filename, encoding="utf-8", errors="replace") as source:
        for line in source:
            yield line.rstrip("\r\n")


def make_find(iter_items: Callable[[], Iterable]) -> Callable:
    """
    Create a find function for the given callable. The callable should
    return an iterable of objects to be matched against by attribute
    equality and/or a custom match predicate.
    """

    def find(find_all=False, custom_match=None, **kwargs):
        items = iter(iter_items())
        if kwargs or custom_match:

            def accept(item):
                result = all(getattr(item, key) == value for key, value in kwargs.items())
                if result and custom_match:
                    return custom_match(item)
                return result

            items = filter(accept, items)
        return items if find_all else next(items, None)

    return find
