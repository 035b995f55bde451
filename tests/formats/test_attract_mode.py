import io

import pytest

from romdat.dats import DatHeader, DatReader, DatWriter, ParseContext, group_items
from romdat.formats.attract_mode import HEADERS, AttractModeCodec
from romdat.items import Rom
from romdat.items.hashing import CRC_ZERO, MD5_ZERO, SHA1_ZERO

ROW = "pacman;Pac-Man (Midway);mame;puckman;1980;Midway;;;;;;;;;;Classic;"


def _parse(lines):
    reader = DatReader(AttractModeCodec(), ParseContext(filename="mame.txt"))
    return list(reader.parse_lines(lines))


@pytest.mark.unit
def test_parse_row_becomes_zero_rom():
    rom = _parse([";".join(HEADERS), ROW])[0]

    assert rom.name == "-"
    assert rom.size == 0
    assert (rom.crc, rom.md5, rom.sha1) == (CRC_ZERO, MD5_ZERO, SHA1_ZERO)
    assert rom.machine_name == "pacman"
    assert rom.machine_description == "Pac-Man (Midway)"
    assert rom.clone_of == "puckman"
    assert rom.year == "1980"
    assert rom.manufacturer == "Midway"
    assert rom.comment == "Classic"


@pytest.mark.unit
def test_short_rows_are_skipped(caplog):
    assert _parse(["pacman;Pac-Man;mame"]) == []
    assert "Expected 17 columns" in caplog.text


@pytest.mark.unit
def test_write_one_row_per_machine():
    header = DatHeader(file_name="mame")
    items = [
        Rom(name="a.bin", machine_name="pacman", machine_description="Pac-Man",
            year="1980", manufacturer="Namco"),
        Rom(name="b.bin", machine_name="pacman", machine_description="Pac-Man"),
    ]
    sink = io.StringIO()

    assert DatWriter(AttractModeCodec(header)).write(group_items(items), sink)

    lines = sink.getvalue().splitlines()
    assert lines[0] == ";".join(HEADERS)
    assert len(lines) == 2
    columns = lines[1].split(";")
    assert len(columns) == 17
    assert columns[:6] == ["pacman", "Pac-Man", "mame", "", "1980", "Namco"]


@pytest.mark.unit
def test_written_row_reparses():
    items = [Rom(name="-", machine_name="galaga", machine_description="Galaga", comment="Shooter")]
    sink = io.StringIO()
    DatWriter(AttractModeCodec()).write(group_items(items), sink)

    rom = _parse(sink.getvalue().splitlines())[0]

    assert rom.machine_name == "galaga"
    assert rom.comment == "Shooter"


@pytest.mark.unit
def test_ignore_blanks_suppresses_zero_size_rows():
    items = _parse(["pacman;Pac-Man;mame;;1980;Namco;;;;;;;;;;;"])
    assert items[0].size == 0

    blanks_dropped = io.StringIO()
    DatWriter(AttractModeCodec(), ignore_blanks=True).write(group_items(items), blanks_dropped)
    kept = io.StringIO()
    DatWriter(AttractModeCodec()).write(group_items(items), kept)

    assert blanks_dropped.getvalue().splitlines() == [";".join(HEADERS)]
    assert kept.getvalue().splitlines()[1].startswith("pacman;Pac-Man;")


@pytest.mark.unit
def test_row_uses_first_non_blank_item_when_blanks_ignored():
    items = [
        Rom(name="empty.bin", machine_name="galaga", size=0, machine_description="Empty"),
        Rom(name="a.bin", machine_name="galaga", size=16, machine_description="Galaga"),
        Rom(name="b.bin", machine_name="galaga", size=32, machine_description="Galaga"),
    ]
    sink = io.StringIO()

    DatWriter(AttractModeCodec(), ignore_blanks=True).write(group_items(items), sink)

    lines = sink.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[1].startswith("galaga;Galaga;")
