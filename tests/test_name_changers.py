"""Name changers: prefix, unique suffix, sanitizing, parameters."""
import re

from web_uploader.services.name_changers import (
    PrefixNameChanger,
    SanitizingNameChanger,
    UniqueNameChanger,
    apply_name_changer,
)


def test_prefix_name_changer():
    assert PrefixNameChanger().change_name("test.txt") == "changed_test.txt"
    changer = PrefixNameChanger()
    changer.set_parameters({"prefix": "u42_", "unknown": "ignored"})
    assert changer.change_name("test.txt") == "u42_test.txt"
    assert not hasattr(changer, "unknown")


def test_unique_name_changer_keeps_extension():
    changer = UniqueNameChanger()
    first = changer.change_name("archive.tar.gz")
    second = changer.change_name("archive.tar.gz")
    assert re.fullmatch(r"archive-[0-9a-f]{32}\.tar\.gz", first)
    assert first != second


def test_unique_name_changer_parameters():
    changer = UniqueNameChanger()
    changer.set_parameters({"separator": "_", "length": 8})
    assert re.fullmatch(r"README_[0-9a-f]{8}", changer.change_name("README"))


def test_sanitizing_name_changer():
    assert SanitizingNameChanger().change_name("../../etc/My File!.PNG") == "My_File_.PNG"
    assert SanitizingNameChanger(lowercase=True).change_name("My File.PNG") == "my_file.png"
    assert SanitizingNameChanger().change_name("   ") == "file"


def test_apply_name_changer_accepts_callables():
    assert apply_name_changer(PrefixNameChanger("x_"), "a.txt") == "x_a.txt"
    assert apply_name_changer(str.upper, "a.txt") == "A.TXT"
