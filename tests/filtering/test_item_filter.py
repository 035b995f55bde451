import pytest

from romdat.filtering import ItemFilter
from romdat.items import BiosSet, Disk, ItemStatus, Release, Rom


@pytest.fixture
def roms():
    return [
        Rom(name="pacman.6e", machine_name="pacman", size=4096, crc="c1e6ab10", clone_of="puckman"),
        Rom(name="puckman.6e", machine_name="puckman", size=4096, crc="c1e6ab10"),
        Rom(name="dk.bin", machine_name="dkong", size=2048, crc="deadbeef",
            status=ItemStatus.BAD_DUMP),
        Rom(name="nd.bin", machine_name="dkong", size=-1, status=ItemStatus.NODUMP),
    ]


def _names(item_filter, items):
    return [item.name for item in items if item_filter.item_passes(item)]


@pytest.mark.unit
def test_empty_filter_keeps_roms_and_disks_only():
    item_filter = ItemFilter()
    items = [Rom(name="r", machine_name="m"), Disk(name="d", machine_name="m"),
             Release(name="USA", machine_name="m"), BiosSet(name="bios", machine_name="m")]

    assert _names(item_filter, items) == ["r", "d"]


@pytest.mark.unit
def test_item_type_criteria_replace_default():
    item_filter = ItemFilter()
    item_filter.item_type.positive_set.append("release")
    items = [Rom(name="r", machine_name="m"), Release(name="USA", machine_name="m")]

    assert _names(item_filter, items) == ["USA"]


@pytest.mark.unit
def test_machine_include_and_exclude(roms):
    item_filter = ItemFilter()
    item_filter.machine_name.positive_set.append("p.*")
    item_filter.machine_name.negative_set.append("puckman")

    assert _names(item_filter, roms) == ["pacman.6e"]


@pytest.mark.unit
def test_parent_match_includes_clones(roms):
    item_filter = ItemFilter()
    item_filter.machine_name.positive_set.append("puckman")
    item_filter.include_of_in_game.neutral = True

    assert _names(item_filter, roms) == ["pacman.6e", "puckman.6e"]


@pytest.mark.unit
def test_parent_exclusion_removes_clones(roms):
    item_filter = ItemFilter()
    item_filter.machine_name.negative_set.append("puckman")
    item_filter.include_of_in_game.neutral = True

    assert _names(item_filter, roms) == ["dk.bin", "nd.bin"]


@pytest.mark.unit
def test_hash_filter(roms):
    item_filter = ItemFilter()
    item_filter.crc.positive_set.append("C1E6AB10")

    assert _names(item_filter, roms) == ["pacman.6e", "puckman.6e"]


@pytest.mark.unit
def test_status_filters(roms):
    exclude_nodump = ItemFilter()
    exclude_nodump.status.negative = ItemStatus.NODUMP
    assert _names(exclude_nodump, roms) == ["pacman.6e", "puckman.6e", "dk.bin"]

    only_bad = ItemFilter()
    only_bad.status.positive_set.append(ItemStatus.BAD_DUMP)
    assert _names(only_bad, roms) == ["dk.bin"]


@pytest.mark.unit
def test_size_bounds(roms):
    exact = ItemFilter()
    exact.size.neutral = 2048
    assert _names(exact, roms) == ["dk.bin"]

    at_least = ItemFilter()
    at_least.size.positive = 3000
    assert _names(at_least, roms) == ["pacman.6e", "puckman.6e"]

    at_most = ItemFilter()
    at_most.size.negative = 3000
    assert _names(at_most, roms) == ["dk.bin", "nd.bin"]


@pytest.mark.unit
def test_filter_items_drops_empty_machines(roms):
    item_filter = ItemFilter()
    item_filter.item_name.negative_set.append(".*\\.6e")
    grouped = {"pacman": roms[:1], "puckman": roms[1:2], "dkong": roms[2:]}

    result = item_filter.filter_items(grouped)

    assert list(result) == ["dkong"]
    assert result["dkong"] == roms[2:]
    assert set(grouped) == {"pacman", "puckman", "dkong"}
