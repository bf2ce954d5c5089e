"""Harbor 项目 artifact 大小统计工具"""

# 导入loguru并配置logger
import sys

from loguru import logger

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"


def configure_logging(debug: bool = False, trace: bool = False) -> None:
    """
    重新配置日志输出

    Args:
        debug: 输出DEBUG级别日志
        trace: 跟踪模式，额外输出异常变量信息
    """
    logger.remove()
    logger.add(
        sink=lambda msg: print(msg, end=""),  # 使用标准输出
        format=LOG_FORMAT,
        colorize=sys.stdout.isatty(),
        level="DEBUG" if debug or trace else "INFO",
        backtrace=trace,
        diagnose=trace,
    )


configure_logging()

__version__ = "1.0.0"

# 导入其他模块
from .cli import app, main

__all__ = [
    "logger",
    "configure_logging",
    "app",
    "main",
]
