import logging

import pytest

from romdat.dats import DatReader, ParseContext
from romdat.formats.everdrive_smdb import EverdriveSmdbCodec
from romdat.formats.hashfile import HashfileCodec
from romdat.items import Hash, Rom
from romdat.items.hashing import CRC_ZERO, MD5_ZERO, SHA1_ZERO
from romdat.stats import DatStats


class _StaticCodec(HashfileCodec):
    """Returns prepared-in-advance items instead of parsing."""

    def __init__(self, items):
        super().__init__()
        self._items = iter(items)

    def parse_line(self, line, context):
        return next(self._items)


@pytest.mark.unit
def test_parse_file_collects_items_and_stats(tmp_path):
    path = tmp_path / "set.sfv"
    path.write_text("a.bin deadbeef\r\nb.bin 00000001\r\n")
    stats = DatStats()
    reader = DatReader(HashfileCodec(hash_type=Hash.CRC), stats=stats)

    assert reader.parse_file(path) is True

    assert [rom.name for rom in reader.items] == ["a.bin", "b.bin"]
    assert all(rom.machine_name == "set" for rom in reader.items)
    assert stats.rom_count == 2
    assert stats.crc_count == 2


@pytest.mark.unit
def test_missing_file_returns_false(tmp_path, caplog):
    reader = DatReader(HashfileCodec())

    with caplog.at_level(logging.ERROR):
        assert reader.parse_file(tmp_path / "missing.sfv") is False

    assert "Failed to read DAT" in caplog.text
    assert reader.items == []


@pytest.mark.unit
def test_items_without_name_or_machine_are_dropped(caplog):
    codec = _StaticCodec([Rom(name=None, machine_name="m"), Rom(name="a.bin", machine_name=None)])
    reader = DatReader(codec, ParseContext(filename="x.dat"))

    assert list(reader.parse_lines(["1", "2"])) == []
    assert "no name" in caplog.text
    assert "no machine name" in caplog.text


@pytest.mark.unit
def test_ids_are_stamped():
    codec = _StaticCodec([Rom(name="a.bin", machine_name="m", size=1)])
    reader = DatReader(codec, ParseContext(system_id=3, source_id=7))

    rom = list(reader.parse_lines(["x"]))[0]

    assert (rom.system_id, rom.source_id) == (3, 7)


@pytest.mark.unit
def test_clean_and_remove_unicode():
    codec = _StaticCodec([
        Rom(name="ロa.bin", machine_name="Pokémon Red (USA) [!]", machine_description="ロ desc", size=1),
    ])
    reader = DatReader(codec, ParseContext(clean=True, remove_unicode=True))

    rom = list(reader.parse_lines(["x"]))[0]

    assert rom.machine_name == "Pokemon Red"
    assert rom.name == "a.bin"
    assert rom.machine_description == " desc"


@pytest.mark.unit
def test_hashes_are_cleaned():
    codec = _StaticCodec([Rom(name="a.bin", machine_name="m", size=1, crc="0xABC", md5="bogus")])
    reader = DatReader(codec)

    rom = list(reader.parse_lines(["x"]))[0]

    assert rom.crc == "00000abc"
    assert rom.md5 is None


@pytest.mark.unit
def test_zero_hash_completes_empty_rom():
    codec = _StaticCodec([Rom(name="empty.bin", machine_name="m", size=-1, sha1=SHA1_ZERO)])
    reader = DatReader(codec)

    rom = list(reader.parse_lines(["x"]))[0]

    assert rom.size == 0
    assert (rom.crc, rom.md5, rom.sha1) == (CRC_ZERO, MD5_ZERO, SHA1_ZERO)


@pytest.mark.unit
def test_unknown_size_without_zero_hash_is_kept():
    reader = DatReader(EverdriveSmdbCodec())
    line = "\t".join(["e" * 64, "Genesis/a.md", "a" * 40, "b" * 32, "c" * 8])

    rom = list(reader.parse_lines([line]))[0]

    assert rom.size == -1
    assert rom.crc == "c" * 8
