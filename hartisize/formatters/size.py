"""大小格式化"""

from ..constants import SIZE_FALLBACK_UNIT, SIZE_UNITS


def human_size(size: int) -> str:
    """
    将字节数转换为二进制单位的可读字符串

    Args:
        size: 字节数

    Returns:
        str: 例如 "1.5MiB"
    """
    value = float(size)
    for unit in SIZE_UNITS:
        if abs(value) < 1024.0:
            return f"{value:3.1f}{unit}B"
        value /= 1024.0
    return f"{value:.1f}{SIZE_FALLBACK_UNIT}B"
