"""Statistics aggregation and reporting for romdat."""

from .dat_stats import DatStats, merge_stats
from .report import format_file_size, render_stats, stats_table

__all__ = [
    'DatStats',
    'merge_stats',
    'format_file_size',
    'render_stats',
    'stats_table',
]
