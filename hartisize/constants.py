"""常量配置模块"""

from typing import List, TypedDict

# 分页相关
DEFAULT_PAGE_SIZE: int = 100

# Harbor API 路径
API_PREFIX: str = "/api/v2.0"
TOTAL_COUNT_HEADER: str = "X-Total-Count"

# 环境变量
TRACE_ENV_VAR: str = "HB_SIZE_TRACE"
PASSWORD_ENV_VAR: str = "HARBOR_PASSWORD"

# 命令行默认值
class DefaultOptions(TypedDict):
    project: str
    username: str
    password: str
    host: str
    progress: bool

DEFAULT_OPTIONS: DefaultOptions = {
    "project": "myProject",
    "username": "Admin",
    "password": "Password",
    "host": "https://localhost",
    "progress": True,
}

# 大小单位（二进制）
SIZE_UNITS: List[str] = ["", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi"]
SIZE_FALLBACK_UNIT: str = "Yi"

# 可解析为布尔值的字符串
TRUE_VALUES: List[str] = ["1", "t", "T", "TRUE", "true", "True"]
FALSE_VALUES: List[str] = ["0", "f", "F", "FALSE", "false", "False"]

# 错误消息
class ErrorMessages(TypedDict):
    invalid_bool: str
    invalid_host: str
    invalid_page_size: str
    request_failed: str
    bad_status: str
    bad_payload: str

ERROR_MESSAGES: ErrorMessages = {
    "invalid_bool": "无法将 {}={!r} 解析为布尔值",
    "invalid_host": "无效的Harbor地址: {}",
    "invalid_page_size": "分页大小必须大于0: {}",
    "request_failed": "请求 {} 失败: {}",
    "bad_status": "请求 {} 返回状态码 {}: {}",
    "bad_payload": "无法解析 {} 的响应内容: {}",
}

# 报表配置
REPORT_TITLE: str = "Harbor artifacts size of project - {}"
REPORT_COLUMNS: List[str] = ["#", "Repository", "CountTags", "Size"]
