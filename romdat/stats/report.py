"""Human-readable output of DAT statistics."""

from typing import Optional

from rich.table import Table

from .dat_stats import DatStats


# Largest unit first: (suffix, bytes per unit, decimals)
_SIZE_UNITS = [
    ("GB", 1024 ** 3, 2),
    ("MB", 1024 ** 2, 1),
    ("KB", 1024, 1),
]


def format_file_size(size_bytes: int) -> str:
    """
    Total size as a short human-readable string ("512 B", "1.5 KB").

    Unknown sizes are counted as -1 each, so a negative total prints as
    "0 B".
    """
    size_bytes = max(size_bytes, 0)
    for suffix, scale, decimals in _SIZE_UNITS:
        if size_bytes >= scale:
            return f"{size_bytes / scale:.{decimals}f} {suffix}"
    return f"{size_bytes} B"


def _rows(stats: DatStats, game_count: Optional[int], baddump_col: bool, nodump_col: bool):
    rows = [
        ("Uncompressed size", format_file_size(stats.total_size)),
        ("Games found", str(stats.game_count if game_count is None else game_count)),
        ("Roms found", str(stats.rom_count)),
        ("Disks found", str(stats.disk_count)),
        ("Roms with CRC", str(stats.crc_count)),
        ("Roms with MD5", str(stats.md5_count)),
        ("Roms with SHA-1", str(stats.sha1_count)),
        ("Roms with SHA-256", str(stats.sha256_count)),
        ("Roms with SHA-384", str(stats.sha384_count)),
        ("Roms with SHA-512", str(stats.sha512_count)),
    ]
    if baddump_col:
        rows.append(("Roms with BadDump status", str(stats.baddump_count)))
    if nodump_col:
        rows.append(("Roms with Nodump status", str(stats.nodump_count)))
    return rows


def render_stats(
    stats: DatStats,
    name: str,
    game_count: Optional[int] = None,
    baddump_col: bool = False,
    nodump_col: bool = False
) -> str:
    """
    Render statistics as the plain text block used in reports.

    Args:
        stats: Counters to render
        name: DAT name for the heading
        game_count: Machine count, overriding stats.game_count when given
        baddump_col: Include the bad dump line
        nodump_col: Include the no dump line

    Returns:
        Multi-line report text
    """
    lines = [f"For '{name}':", "-" * 50]
    for label, value in _rows(stats, game_count, baddump_col, nodump_col):
        lines.append(f"    {label + ':':<25}{value}")
    return "\n".join(lines) + "\n"


def stats_table(
    stats: DatStats,
    name: str,
    game_count: Optional[int] = None,
    baddump_col: bool = False,
    nodump_col: bool = False
) -> Table:
    """Build a rich table of the same numbers for console display."""
    table = Table(title=name, show_header=False, box=None, padding=(0, 1))
    table.add_column("Statistic", style="bold")
    table.add_column("Value", justify="right")
    for label, value in _rows(stats, game_count, baddump_col, nodump_col):
        table.add_row(label, value)
    return table
