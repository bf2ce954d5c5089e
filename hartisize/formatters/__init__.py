"""输出格式化模块"""

from .report import SortMode, build_report_table, print_report, render_report, sort_mode_from_flags
from .size import human_size

__all__ = [
    "SortMode",
    "build_report_table",
    "print_report",
    "render_report",
    "sort_mode_from_flags",
    "human_size",
]
