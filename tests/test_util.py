#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import pytest

from usb_ids.util import int16, iter_lines, make_find, split_ids


def test_int16():
    assert int16("1d6b") == 0x1D6B
    assert int16("FFEE") == 0xFFEE
    with pytest.raises(ValueError):
        int16("xyz")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1d6b", (0x1D6B,)),
        ("1d6b:0003", (0x1D6B, 0x0003)),
        ("07:01:03", (0x07, 0x01, 0x03)),
        ("0x1d6b:0x3", (0x1D6B, 0x3)),
    ],
)
def test_split_ids(text, expected):
    assert split_ids(text) == expected


@pytest.mark.parametrize("text", ["", "1d6b:", "zz", "1:2:3:4"])
def test_split_ids_error(text):
    with pytest.raises(ValueError):
        split_ids(text)


def test_iter_lines(tmp_path):
    path = tmp_path / "lines.txt"
    path.write_bytes(b"first\r\n\tsecond\n\xff third\n")
    assert list(iter_lines(path)) == ["first", "\tsecond", "\ufffd third"]


def test_make_find():
    class Item:
        def __init__(self, i):
            self.i = i

    items = [Item(a) for a in range(3)]

    def i():
        return items

    find = make_find(i)

    assert find() is items[0]
    assert find(i=1) is items[1]
    assert find(i=5) is None
    assert find(custom_match=lambda item: item.i > 0) is items[1]
    assert find(custom_match=lambda item: item.i > 2) is None
    assert len(tuple(find(find_all=True))) == 3
    assert all(a is b for a, b in zip(items, find(find_all=True), strict=True))
    assert all(a is b for a, b in zip(items[1:2], find(find_all=True, i=1), strict=True))
    assert all(
        a is b for a, b in zip(items[1:3], find(find_all=True, custom_match=lambda item: item.i > 0), strict=True)
    )
    assert list(find(find_all=True, i=1, custom_match=lambda item: item.i > 1)) == []
