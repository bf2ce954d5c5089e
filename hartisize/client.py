"""Harbor REST API 客户端"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import quote, quote_plus

import requests
from loguru import logger

from .config import SizeConfig
from .constants import API_PREFIX, ERROR_MESSAGES, TOTAL_COUNT_HEADER


class UpstreamError(Exception):
    """Harbor 接口调用错误"""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


@dataclass
class Page:
    """一次分页查询的结果"""

    items: List[Dict[str, Any]] = field(default_factory=list)
    total_count: int = 0


def escape_repository_name(project: str, repository: str) -> str:
    """
    转义仓库名，用于artifact接口的路径

    Harbor 返回的仓库名带有 "<project>/" 前缀，需要先去掉；
    嵌套仓库名中的斜杠必须经过两次编码（a/b -> a%252Fb）。

    Args:
        project: 项目名称
        repository: 仓库名称

    Returns:
        str: 可直接拼接到URL路径中的仓库名
    """
    prefix = f"{project}/"
    if repository.startswith(prefix):
        repository = repository[len(prefix):]
    return quote(quote_plus(repository), safe="")


class HarborClient:
    """Harbor 客户端类，只包含本工具需要的两个只读接口"""

    def __init__(self, config: SizeConfig, session: Optional[requests.Session] = None) -> None:
        """
        初始化Harbor客户端

        Args:
            config: 运行配置
            session: 可选的requests会话，默认新建
        """
        self.config = config
        self.base_url = f"{config.host}{API_PREFIX}"
        self.session = session or requests.Session()
        self.session.auth = (config.username, config.password)
        self.session.verify = config.verify_tls
        logger.debug(f"Harbor客户端初始化成功: {self.base_url}")

    def __enter__(self) -> "HarborClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """关闭底层会话"""
        self.session.close()

    def list_repositories(self, project: str, page: int, page_size: int) -> Page:
        """
        分页获取项目下的仓库

        Args:
            project: 项目名称
            page: 页码，从1开始
            page_size: 每页数量

        Returns:
            Page: 仓库列表及总数
        """
        path = f"/projects/{quote(project, safe='')}/repositories"
        return self._get_page(path, {"page": page, "page_size": page_size})

    def list_artifacts(self, project: str, repository: str, page: int, page_size: int) -> Page:
        """
        分页获取仓库下的artifact

        Args:
            project: 项目名称
            repository: 仓库名称（可带项目前缀）
            page: 页码，从1开始
            page_size: 每页数量

        Returns:
            Page: artifact列表及总数
        """
        repo = escape_repository_name(project, repository)
        logger.debug(f"RepositoryName: {repo}")
        path = f"/projects/{quote(project, safe='')}/repositories/{repo}/artifacts"
        return self._get_page(path, {"page": page, "page_size": page_size, "with_tag": "true"})

    def _get_page(self, path: str, params: Dict[str, Any]) -> Page:
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} {params}")

        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise UpstreamError(ERROR_MESSAGES["request_failed"].format(url, e), url=url) from e

        if not response.ok:
            raise UpstreamError(
                ERROR_MESSAGES["bad_status"].format(url, response.status_code, response.text.strip()),
                url=url,
                status_code=response.status_code,
            )

        try:
            items = response.json() or []
        except ValueError as e:
            raise UpstreamError(ERROR_MESSAGES["bad_payload"].format(url, e), url=url) from e

        if not isinstance(items, list):
            raise UpstreamError(ERROR_MESSAGES["bad_payload"].format(url, type(items).__name__), url=url)

        # 缺少总数头时退化为本页数量
        total = response.headers.get(TOTAL_COUNT_HEADER)
        try:
            total_count = int(total) if total is not None else len(items)
        except ValueError as e:
            raise UpstreamError(ERROR_MESSAGES["bad_payload"].format(url, e), url=url) from e

        return Page(items=items, total_count=total_count)
