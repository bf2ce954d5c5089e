"""测试公共夹具：内存中的Harbor接口"""

from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote

import pytest
import requests

from hartisize.client import HarborClient, Page
from hartisize.config import SizeConfig
from hartisize.constants import API_PREFIX, PASSWORD_ENV_VAR, TRACE_ENV_VAR

HOST = "https://harbor.test"


class FakeResponse:
    """只实现客户端用到的 requests.Response 属性"""

    def __init__(self, status_code: int = 200, payload=None, headers: Optional[Dict[str, str]] = None, text: str = ""):
        self.status_code = status_code
        self.payload = payload
        self.headers = headers or {}
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeHarborSession:
    """模拟 Harbor 的仓库和artifact列表接口"""

    def __init__(self, repositories: Dict[str, List[int]], failing: Tuple[str, ...] = ()):
        # key 为带项目前缀的仓库名，value 为各artifact大小
        self.repositories = repositories
        self.failing = set(failing)
        self.calls: List[Tuple[str, Dict]] = []
        self.timeouts: List[Optional[float]] = []
        self.auth = None
        self.verify = True
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def get(self, url: str, params=None, timeout=None) -> FakeResponse:
        params = dict(params or {})
        self.calls.append((url, params))
        self.timeouts.append(timeout)

        path = url[len(HOST + API_PREFIX):]
        parts = path.strip("/").split("/")
        project = unquote(parts[1])

        if len(parts) == 3:
            items = [{"name": name} for name in self.repositories if name.startswith(f"{project}/")]
        else:
            repo = f"{project}/{unquote(unquote(parts[3]))}"
            if repo in self.failing:
                return FakeResponse(500, text="internal error")
            if repo not in self.repositories:
                return FakeResponse(404, text="not found")
            items = [{"size": size} for size in self.repositories[repo]]

        page = int(params.get("page", 1))
        page_size = int(params.get("page_size", 10))
        start = (page - 1) * page_size
        return FakeResponse(
            200,
            payload=items[start:start + page_size],
            headers={"X-Total-Count": str(len(items))},
        )

    def artifact_calls(self) -> List[str]:
        """按顺序返回artifact请求对应的仓库名"""
        names = []
        for url, _ in self.calls:
            parts = url[len(HOST + API_PREFIX):].strip("/").split("/")
            if len(parts) == 5:
                names.append(unquote(unquote(parts[3])))
        return names


class FakeClient:
    """按仓库名返回预设分页的客户端"""

    def __init__(
        self,
        repositories: List[str],
        artifacts: Dict[str, List[Page]],
        errors: Optional[Dict[str, Exception]] = None,
        log: Optional[list] = None,
    ):
        self.repositories = repositories
        self.artifacts = artifacts
        self.errors = errors or {}
        self.requests: List[Tuple[str, int]] = []
        # 与观察者共用时可检查请求和进度事件的先后顺序
        self.log = log if log is not None else []

    def list_repositories(self, project: str, page: int, page_size: int) -> Page:
        start = (page - 1) * page_size
        return Page(
            items=[{"name": name} for name in self.repositories[start:start + page_size]],
            total_count=len(self.repositories),
        )

    def list_artifacts(self, project: str, repository: str, page: int, page_size: int) -> Page:
        self.requests.append((repository, page))
        self.log.append(("req", repository, page))
        if repository in self.errors:
            raise self.errors[repository]
        pages = self.artifacts.get(repository, [])
        if not pages:
            return Page(items=[], total_count=0)
        return pages[page - 1]


class RecordingObserver:
    def __init__(self, log: Optional[list] = None):
        self.events = log if log is not None else []

    def on_start(self, total: int) -> None:
        self.events.append(("start", total))

    def on_repository_processed(self, name: str) -> None:
        self.events.append(("processed", name))

    def on_finish(self) -> None:
        self.events.append(("finish", None))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # 先 setenv 再 delenv，测试中由 .env 写入的变量在结束后也会被清除
    for name in (TRACE_ENV_VAR, PASSWORD_ENV_VAR):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def config() -> SizeConfig:
    return SizeConfig(project="lib", username="admin", password="secret", host=HOST, progress=False)


@pytest.fixture
def make_client(config):
    def _make(session: FakeHarborSession) -> HarborClient:
        return HarborClient(config, session=session)

    return _make


@pytest.fixture
def recording_observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
