import io

import pytest

from romdat.dats import DatHeader, DatReader, DatWriter, group_items
from romdat.formats.romcenter import RomCenterCodec
from romdat.items import Disk, ForceMerging, Rom


@pytest.mark.unit
def test_parse_sample_file(data_dir):
    codec = RomCenterCodec()
    reader = DatReader(codec)

    assert reader.parse_file(data_dir / "dats" / "romcenter_sample.dat")

    header = codec.header
    assert header.author == "Tester"
    assert header.version == "20240101"
    assert header.comment == "Sample"
    assert header.name == "Sample Arcade"
    assert header.description == "Sample Arcade description"
    assert header.force_merging == ForceMerging.SPLIT

    rom = reader.items[0]
    assert rom.machine_name == "pacman"
    assert rom.machine_description == "Pac-Man & Friends"
    assert rom.clone_of == "puckman"
    assert rom.rom_of == "puckman"
    assert rom.name == "pacman.6e"
    assert rom.crc == "c1e6ab10"
    assert rom.size == 4096
    assert rom.merge_tag == "pacman.6e"


@pytest.mark.unit
def test_first_header_value_wins():
    codec = RomCenterCodec()
    reader = DatReader(codec)
    list(reader.parse_lines(["[CREDITS]", "author=First", "author=Second"]))

    assert codec.header.author == "First"


@pytest.mark.unit
def test_legacy_marker_and_short_rows(caplog):
    codec = RomCenterCodec()
    reader = DatReader(codec)
    lines = [
        "[GAMES]",
        "¬¬¬game¬Game¬a.bin¬deadbeef¬16¬¬¬N¬O",
        "¬too¬short¬",
        "not a row",
    ]

    items = list(reader.parse_lines(lines))

    assert len(items) == 1
    assert items[0].machine_name == "game"
    assert items[0].name == "a.bin"
    assert "Invalid game row" in caplog.text


@pytest.mark.unit
def test_write_header_and_rows():
    header = DatHeader(name="Arcade", description="Arcade set", author="Me",
                       force_merging=ForceMerging.MERGED)
    items = [
        Rom(name="a&b.bin", size=16, crc="deadbeef", machine_name="game",
            clone_of="parent", rom_of="parent"),
        Disk(name="hdd", machine_name="game", machine_description="Game <HD>"),
    ]
    sink = io.StringIO()

    assert DatWriter(RomCenterCodec(header)).write(group_items(items), sink)

    lines = sink.getvalue().splitlines()
    assert lines[:12] == [
        "[CREDITS]", "author=Me", "version=", "comment=",
        "[DAT]", "version=2.50", "split=0", "merge=1",
        "[EMULATOR]", "refname=Arcade", "version=Arcade set",
        "[GAMES]",
    ]
    assert lines[12] == "¬parent¬parent¬game¬game¬a&amp;b.bin¬deadbeef¬16¬parent¬¬"
    assert lines[13] == "¬¬¬game¬Game &lt;HD&gt;¬hdd¬¬¬¬¬"


@pytest.mark.unit
def test_written_file_reparses():
    header = DatHeader(name="Arcade")
    items = [Rom(name="a&b.bin", size=16, crc="deadbeef", machine_name="game")]
    sink = io.StringIO()
    DatWriter(RomCenterCodec(header)).write(group_items(items), sink)

    codec = RomCenterCodec()
    parsed = list(DatReader(codec).parse_lines(sink.getvalue().splitlines()))

    assert codec.header.name == "Arcade"
    assert parsed[0].name == "a&b.bin"
    assert parsed[0].size == 16


@pytest.mark.unit
def test_quotes_are_written_as_entities():
    items = [Rom(name="it's.bin", size=16, crc="deadbeef", machine_name="game",
                 machine_description='The "Best" Game')]
    sink = io.StringIO()
    DatWriter(RomCenterCodec(DatHeader())).write(group_items(items), sink)

    row = sink.getvalue().splitlines()[-1]
    assert "The &quot;Best&quot; Game" in row
    assert "it&#x27;s.bin" in row

    parsed = list(DatReader(RomCenterCodec()).parse_lines(sink.getvalue().splitlines()))
    assert parsed[0].machine_description == 'The "Best" Game'
    assert parsed[0].name == "it's.bin"
