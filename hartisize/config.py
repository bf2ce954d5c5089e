"""运行配置模块"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional
from urllib.parse import urlparse

from dotenv import find_dotenv, load_dotenv
from loguru import logger

from .constants import (
    DEFAULT_OPTIONS,
    DEFAULT_PAGE_SIZE,
    ERROR_MESSAGES,
    FALSE_VALUES,
    TRACE_ENV_VAR,
    TRUE_VALUES,
)


class ConfigError(Exception):
    """配置错误"""

    pass


@dataclass(frozen=True)
class SizeConfig:
    """一次运行的全部配置，启动时构建一次，之后只读"""

    project: str = DEFAULT_OPTIONS["project"]
    username: str = DEFAULT_OPTIONS["username"]
    password: str = DEFAULT_OPTIONS["password"]
    host: str = DEFAULT_OPTIONS["host"]
    sort_asc: bool = False
    sort_dsc: bool = False
    progress: bool = DEFAULT_OPTIONS["progress"]
    debug: bool = False
    trace: bool = False
    verify_tls: bool = True
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: Optional[float] = None


def parse_bool(name: str, value: str) -> bool:
    """
    按照原工具接受的写法解析布尔字符串

    Args:
        name: 变量名，用于错误提示
        value: 待解析的字符串

    Returns:
        bool: 解析结果

    Raises:
        ConfigError: 无法解析时抛出
    """
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigError(ERROR_MESSAGES["invalid_bool"].format(name, value))


def load_env_file() -> bool:
    """
    加载当前工作目录（或其上级目录）中的 .env 文件

    已存在的环境变量不会被覆盖。必须在解析命令行参数之前调用，
    这样 .env 中的 HARBOR_PASSWORD 等变量才能作为参数默认值生效。

    Returns:
        bool: 是否找到并加载了 .env 文件
    """
    path = find_dotenv(usecwd=True)
    if not path:
        return False
    logger.debug(f"加载环境变量文件: {path}")
    return load_dotenv(path, override=False)


def load_trace_flag(environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    读取跟踪开关环境变量

    未设置时返回False；设置了但不是合法布尔值时抛出ConfigError。
    """
    if environ is None:
        environ = os.environ

    value = environ.get(TRACE_ENV_VAR)
    if value is None:
        return False
    return parse_bool(TRACE_ENV_VAR, value)


def validate_host(host: str) -> str:
    """
    校验Harbor地址

    Args:
        host: 形如 https://harbor.example.com 的地址

    Returns:
        str: 去掉末尾斜杠后的地址

    Raises:
        ConfigError: 地址无效时抛出
    """
    try:
        parsed = urlparse(host)
    except ValueError as e:
        raise ConfigError(ERROR_MESSAGES["invalid_host"].format(f"{host} ({e})"))

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(ERROR_MESSAGES["invalid_host"].format(host))

    return host.rstrip("/")


def build_config(**options) -> SizeConfig:
    """
    根据命令行参数构建配置

    Args:
        **options: SizeConfig 的字段

    Returns:
        SizeConfig: 校验后的配置

    Raises:
        ConfigError: 配置无效时抛出
    """
    config = SizeConfig(**options)

    if config.page_size <= 0:
        raise ConfigError(ERROR_MESSAGES["invalid_page_size"].format(config.page_size))

    host = validate_host(config.host)
    if host != config.host:
        config = replace(config, host=host)

    return config
