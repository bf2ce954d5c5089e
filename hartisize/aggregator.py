"""仓库大小汇总"""

from dataclasses import dataclass
from functools import partial
from typing import List, Optional, Protocol

from loguru import logger

from .client import HarborClient, Page
from .constants import DEFAULT_PAGE_SIZE
from .pagination import paginate


@dataclass
class RepositorySizeSummary:
    """单个仓库的汇总信息"""

    repository_name: str
    tag_count: int = 0
    total_size: int = 0


class ProgressObserver(Protocol):
    """进度观察者接口"""

    def on_start(self, total: int) -> None:
        ...

    def on_repository_processed(self, name: str) -> None:
        ...

    def on_finish(self) -> None:
        ...


class NullObserver:
    """不做任何事的观察者"""

    def on_start(self, total: int) -> None:
        pass

    def on_repository_processed(self, name: str) -> None:
        pass

    def on_finish(self) -> None:
        pass


class SizeAggregator:
    """遍历项目下的仓库和artifact，按仓库累加大小"""

    def __init__(
        self,
        client: HarborClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        observer: Optional[ProgressObserver] = None,
    ) -> None:
        """
        初始化汇总器

        Args:
            client: Harbor客户端
            page_size: 每页数量
            observer: 进度观察者，默认不显示进度
        """
        self.client = client
        self.page_size = page_size
        self.observer = observer or NullObserver()

    def list_repositories(self, project: str) -> List[str]:
        """
        获取项目下全部仓库名，保持上游返回的顺序

        Args:
            project: 项目名称

        Returns:
            List[str]: 仓库名列表
        """
        logger.debug(f"try get repos for {project} project")
        fetch = partial(self.client.list_repositories, project)
        names: List[str] = []
        for page in paginate(fetch, self.page_size):
            names.extend(item["name"] for item in page.items)
        return names

    def aggregate(self, project: str) -> List[RepositorySizeSummary]:
        """
        汇总项目下每个仓库的artifact大小

        任意一页请求失败都会中止整个汇总，异常原样抛出。

        Args:
            project: 项目名称

        Returns:
            List[RepositorySizeSummary]: 每个非空仓库一条记录
        """
        repositories = self.list_repositories(project)
        self.observer.on_start(len(repositories))

        summaries: List[RepositorySizeSummary] = []
        for name in repositories:
            fetch = partial(self.client.list_artifacts, project, name)
            pages = paginate(fetch, self.page_size)
            first = next(pages, None)

            self.observer.on_repository_processed(name)
            if first is None:
                logger.debug(f"仓库 {name} 没有artifact，跳过")
                continue

            logger.debug(f"try get artifacts for {project} project && {name} repository")
            summary = RepositorySizeSummary(repository_name=name)
            self._add_page(summary, first)
            for page in pages:
                self._add_page(summary, page)
            summaries.append(summary)

        self.observer.on_finish()
        return summaries

    @staticmethod
    def _add_page(summary: RepositorySizeSummary, page: Page) -> None:
        # tag_count 只保留最后一页的数量，与原工具一致
        summary.tag_count = len(page.items)
        summary.total_size += sum(int(item.get("size") or 0) for item in page.items)
