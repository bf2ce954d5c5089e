"""汇总报表渲染"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.table import Table

from ..aggregator import RepositorySizeSummary
from ..constants import REPORT_COLUMNS, REPORT_TITLE
from .size import human_size


class SortMode(str, Enum):
    """按大小排序方式"""

    NONE = "none"
    ASC = "asc"
    DESC = "desc"


def sort_mode_from_flags(sort_asc: bool, sort_dsc: bool) -> SortMode:
    """
    根据命令行开关确定排序方式

    两个开关同时打开时升序优先。
    """
    if sort_asc:
        return SortMode.ASC
    if sort_dsc:
        return SortMode.DESC
    return SortMode.NONE


def _sorted_rows(
    summaries: Sequence[RepositorySizeSummary], sort_mode: SortMode
) -> List[Tuple[int, RepositorySizeSummary]]:
    # 序号跟随行一起排序
    rows = list(enumerate(summaries))
    if sort_mode is SortMode.ASC:
        rows.sort(key=lambda row: row[1].total_size)
    elif sort_mode is SortMode.DESC:
        rows.sort(key=lambda row: row[1].total_size, reverse=True)
    return rows


def build_report_table(
    project: str,
    summaries: Sequence[RepositorySizeSummary],
    sort_mode: SortMode = SortMode.NONE,
) -> Table:
    """
    构建报表表格

    Args:
        project: 项目名称
        summaries: 汇总结果
        sort_mode: 排序方式

    Returns:
        Table: rich 表格，包含合计行
    """
    table = Table(
        title=REPORT_TITLE.format(project),
        title_justify="center",
        show_footer=True,
        header_style="bold cyan",
        footer_style="bold",
    )

    total = sum(summary.total_size for summary in summaries)
    footer = ["ArtifactsCount", str(len(summaries)), "TotalSize", human_size(total)]
    for name, footer_text in zip(REPORT_COLUMNS, footer):
        table.add_column(name, footer=footer_text, justify="center")

    for index, summary in _sorted_rows(summaries, sort_mode):
        table.add_row(
            str(index),
            summary.repository_name,
            str(summary.tag_count),
            human_size(summary.total_size),
        )

    return table


def print_report(
    console: Console,
    project: str,
    summaries: Sequence[RepositorySizeSummary],
    sort_mode: SortMode = SortMode.NONE,
) -> None:
    """将报表输出到控制台"""
    console.print(build_report_table(project, summaries, sort_mode))


def render_report(
    project: str,
    summaries: Sequence[RepositorySizeSummary],
    sort_mode: SortMode = SortMode.NONE,
    width: Optional[int] = 120,
) -> str:
    """
    将报表渲染为纯文本

    Args:
        project: 项目名称
        summaries: 汇总结果
        sort_mode: 排序方式
        width: 渲染宽度

    Returns:
        str: 渲染后的表格文本
    """
    console = Console(width=width, color_system=None)
    with console.capture() as capture:
        print_report(console, project, summaries, sort_mode)
    return capture.get()
