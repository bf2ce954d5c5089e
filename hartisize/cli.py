"""CLI命令行接口模块"""

import sys
from typing import Optional

import typer
from loguru import logger
from rich.console import Console

from . import __version__, configure_logging
from .aggregator import NullObserver, SizeAggregator
from .client import HarborClient, UpstreamError
from .config import ConfigError, SizeConfig, build_config, load_env_file, load_trace_flag
from .constants import DEFAULT_OPTIONS, PASSWORD_ENV_VAR
from .formatters import print_report, sort_mode_from_flags
from .progress import RichProgressObserver

# 创建CLI应用
app = typer.Typer(
    help="hartisize – 统计Harbor项目中各仓库artifact占用的空间",
    add_completion=False,
    rich_markup_mode="rich",
)


def create_client(config: SizeConfig) -> HarborClient:
    """根据配置创建Harbor客户端"""
    return HarborClient(config)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hartisize version {__version__}")
        raise typer.Exit()


def run(config: SizeConfig, console: Console) -> None:
    """
    执行一次完整统计并输出报表

    Args:
        config: 运行配置
        console: 输出报表的控制台

    Raises:
        UpstreamError: 任意接口调用失败时抛出，此时不输出报表
    """
    progress_bar = RichProgressObserver(console) if config.progress else None
    observer = progress_bar or NullObserver()
    with create_client(config) as client:
        aggregator = SizeAggregator(client, page_size=config.page_size, observer=observer)
        try:
            summaries = aggregator.aggregate(config.project)
        finally:
            if progress_bar is not None:
                progress_bar.close()

    print_report(console, config.project, summaries, sort_mode_from_flags(config.sort_asc, config.sort_dsc))


@app.command()
def report(
    project: str = typer.Option(DEFAULT_OPTIONS["project"], "--project", help="项目名称"),
    username: str = typer.Option(DEFAULT_OPTIONS["username"], "--username", help="Harbor账号用户名"),
    password: str = typer.Option(
        DEFAULT_OPTIONS["password"], "--password", envvar=PASSWORD_ENV_VAR, help="Harbor账号密码"
    ),
    host: str = typer.Option(DEFAULT_OPTIONS["host"], "--host", help="Harbor地址"),
    sort_asc: bool = typer.Option(False, "--sortAsc", help="按大小升序排列"),
    sort_dsc: bool = typer.Option(False, "--sortDsc", help="按大小降序排列"),
    progress: bool = typer.Option(DEFAULT_OPTIONS["progress"], "--progress/--no-progress", help="显示进度条"),
    debug: bool = typer.Option(False, "--debug", help="输出调试日志"),
    insecure: bool = typer.Option(False, "--insecure", help="不校验TLS证书"),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0, help="单次请求超时时间（秒），默认不限制"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="显示版本号"
    ),
):
    """获取Harbor项目下所有仓库和artifact，输出每个仓库占用的空间"""
    try:
        trace = load_trace_flag()
        config = build_config(
            project=project,
            username=username,
            password=password,
            host=host,
            sort_asc=sort_asc,
            sort_dsc=sort_dsc,
            progress=progress,
            debug=debug,
            trace=trace,
            verify_tls=not insecure,
            timeout=timeout,
        )
        configure_logging(debug=config.debug, trace=config.trace)
        logger.debug(f"运行配置: project={config.project}, host={config.host}, page_size={config.page_size}")
        run(config, Console())
    except (ConfigError, UpstreamError) as e:
        logger.error(f"错误：{str(e)}")
        sys.exit(1)


def main():
    """主入口函数"""
    # .env 必须在解析参数之前加载
    load_env_file()
    app()


if __name__ == "__main__":
    main()
