#
# This file is part of the usb-ids project
#
# Copyright (c) 2023 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

from unittest import mock

import pytest
from conftest import SAMPLE

from usb_ids import Device, Vendor, config
from usb_ids.base import Section
from usb_ids.database import Database, default_database, get_database, reset_database, set_database


def test_default_database_is_bundled():
    db = get_database()
    assert db.source == str(config.BUNDLED_PATH)
    assert db.version == "2019.11.05"
    assert db.date == "2019-11-05 20:34:06"
    assert "Database version=2019.11.05" in repr(db)


def test_database_is_loaded_once():
    with mock.patch.object(Database, "from_file", wraps=Database.from_file) as from_file:
        db = get_database()
        assert get_database() is db
        Vendor.from_id(0x1D6B)
        Device.from_vid_pid(0x1D6B, 0x0001)
    from_file.assert_called_once_with(config.BUNDLED_PATH)


def test_reset_database():
    db = get_database()
    reset_database()
    assert get_database() is not db


def test_set_database_from_path(sample_path):
    assert Vendor.from_id(0x1D6B) is not None
    db = set_database(sample_path)
    assert get_database() is db
    assert db.source == str(sample_path)
    assert db.version == "2024.01.01"
    assert Vendor.from_id(0x1D6B) is None
    assert Vendor.from_id(0x0001).name == "Vendor One"

    reset_database()
    assert Vendor.from_id(0x1D6B).name == "Linux Foundation"


def test_set_database_instance():
    db = Database.from_lines(["0042  The Answer"], source="memory")
    assert set_database(db) is db
    assert Vendor.from_id(0x0042).name == "The Answer"
    assert default_database.cache_info().currsize == 0


def test_database_from_env(sample_path, monkeypatch):
    monkeypatch.setenv(config.PATH_ENV, str(sample_path))
    assert get_database().source == str(sample_path)
    assert Device.from_vid_pid(0x0001, 0x0002).name == "Device Two"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Database.from_file(tmp_path / "missing.ids")
    with pytest.raises(FileNotFoundError):
        set_database(tmp_path / "missing.ids")


def test_tables_and_sizes():
    db = Database.from_lines(SAMPLE.splitlines())
    assert db.source is None
    assert set(db.tables) == set(Section)
    assert db.vendors is db.tables[Section.VENDORS]
    assert db.classes is db.tables[Section.CLASSES]
    sizes = db.sizes()
    assert sizes[Section.VENDORS] == 2
    assert sizes[Section.CLASSES] == 2
    assert sizes[Section.AUDIO_TERMINALS] == 1
    assert sizes[Section.COUNTRIES] == 0


def test_empty_database():
    db = Database()
    assert all(size == 0 for size in db.sizes().values())
    assert db.version is None
    set_database(db)
    assert Vendor.from_id(0x1D6B) is None
    assert Device.from_vid_pid(0x1D6B, 0x0003) is None


def test_to_dict():
    data = Database.from_lines(SAMPLE.splitlines()).to_dict()

    assert set(data) == {section.value for section in Section}
    assert data["vendors"][0x0001] == {
        "name": "Vendor One",
        "children": {
            0x0001: {
                "name": "Device One",
                "children": {0x00: {"name": "Interface Zero"}, 0x01: {"name": "Interface One"}},
            },
            0x0002: {"name": "Device Two", "children": {}},
        },
    }
    assert data["vendors"][0x0002] == {"name": "Vendor Two", "children": {}}
    assert data["audio_terminals"] == {0x0101: {"name": "USB Streaming"}}
    assert data["languages"] == {0x0009: {"name": "English", "children": {0x01: {"name": "US"}}}}
    assert data["countries"] == {}


def test_from_dict():
    db = get_database()
    copy = Database.from_dict(db.to_dict(), db.version, db.date)

    assert copy.version == db.version
    assert copy.tables == db.tables
    device = copy.vendors[0x1D6B][0x0003]
    assert device.vendor is copy.vendors[0x1D6B]
    assert device == Device.from_vid_pid(0x1D6B, 0x0003)
