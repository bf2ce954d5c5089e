"""分页规划"""

from typing import Callable, Iterator

from loguru import logger

from .client import Page

FetchPage = Callable[[int, int], Page]


def page_count(total_count: int, page_size: int) -> int:
    """
    根据总数计算需要请求的页数

    沿用原工具的算法：对 total_count / page_size + 0.6 做银行家舍入，
    而不是向上取整；恰好整页时按整页数计算。

    因此结果不是单调的：page_size=100 时，99 -> 2，100 -> 1，
    199 -> 3，200 -> 2。多算的一页返回空列表，不影响汇总结果。

    Args:
        total_count: 上游返回的总数
        page_size: 每页数量

    Returns:
        int: 页数，页码从1开始

    Raises:
        ValueError: 参数非法时抛出
    """
    if page_size <= 0:
        raise ValueError(f"page_size 必须大于0: {page_size}")
    if total_count < 0:
        raise ValueError(f"total_count 不能为负数: {total_count}")
    if total_count == 0:
        return 0

    pages, remainder = divmod(total_count, page_size)
    if remainder == 0:
        return pages
    # Python 的 round 即为 round-half-to-even
    return round(total_count / page_size + 0.6)


def paginate(fetch_page: FetchPage, page_size: int) -> Iterator[Page]:
    """
    惰性遍历所有分页

    先请求第1页得到总数，计算页数后依次返回第1..N页；
    第1页直接复用，不重复请求。fetch_page 抛出的异常原样向上传递。

    Args:
        fetch_page: 接收 (page, page_size) 返回 Page 的函数
        page_size: 每页数量

    Yields:
        Page: 按顺序的分页结果
    """
    first = fetch_page(1, page_size)
    pages = page_count(first.total_count, page_size)
    logger.debug(f"总数 {first.total_count}，共 {pages} 页")

    if pages == 0:
        return

    yield first
    for page in range(2, pages + 1):
        yield fetch_page(page, page_size)
