# -*- coding: utf-8 -*-
"""
日志文件工具

- 按日期生成归档文件名
- 从日志文件头行或文件元数据推断创建时间
- 压缩旧日志文件并重命名为带日期的归档（gzip / brotli）

归档命名格式：
{YYYY-MM-DD}-{H}-{M}-{S}-{ms}{原扩展名}.{gz|br}

示例：
2024-01-01-0-0-0-0.log.gz
"""

import asyncio
import gzip
import logging
import os
from datetime import datetime, timezone
from functools import partial
from typing import Callable, List, Optional

import brotli

from loglet.os.file import read_bytes, read_file, rename_file, write_bytes

from .constants import DEFAULT_ENCODING

logger = logging.getLogger(__name__)


async def run_blocking(func: Callable, *args):
    """在默认线程池中执行阻塞的文件系统调用"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args))


def format_date_file_name(date: datetime) -> str:
    """把日期转换为归档文件名（时分秒与毫秒不补零）

    Args:
        date: 日期

    Returns:
        str: 例如 ``2024-01-01-0-0-0-0``
    """
    return (
        f"{date.strftime('%Y-%m-%d')}-{date.hour}-{date.minute}-"
        f"{date.second}-{date.microsecond // 1000}"
    )


def log_date_header(date: Optional[datetime] = None) -> str:
    """生成日志文件头行 ``[<ISO-8601>]``

    时间统一转换为 UTC，保留毫秒，以 ``Z`` 结尾。
    """
    if date is None:
        date = datetime.now(timezone.utc)
    elif date.tzinfo is None:
        date = date.astimezone()
    date = date.astimezone(timezone.utc)
    return f"[{date.strftime('%Y-%m-%dT%H:%M:%S')}.{date.microsecond // 1000:03d}Z]"


def parse_date_header(header: str) -> Optional[datetime]:
    """解析 ``[<ISO-8601>]`` 形式的头行，无法解析时返回 None"""
    header = header.strip()
    if not (header.startswith("[") and header.endswith("]")):
        return None

    timestamp = header[1:-1].strip()
    if timestamp.endswith(("Z", "z")):
        timestamp = timestamp[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(timestamp)
    except ValueError:
        return None


def _stat_creation_date(stat: os.stat_result) -> datetime:
    birthtime = getattr(stat, "st_birthtime", None)
    if birthtime:
        return datetime.fromtimestamp(birthtime)
    return datetime.fromtimestamp(stat.st_ctime)


async def get_file_creation_date(
    file: str,
    stat: Optional[os.stat_result] = None,
    lines: Optional[List[str]] = None,
) -> datetime:
    """获取日志文件的创建时间

    优先使用首行 ``[...]`` 中的时间戳；否则使用文件的 birthtime，
    不支持 birthtime 时使用 ctime。

    Args:
        file: 文件路径
        stat: 已获取的 stat 结果
        lines: 已读取的文件行

    Returns:
        datetime: 创建时间
    """
    if stat is None:
        stat = await run_blocking(os.stat, file)
    if lines is None:
        content = await run_blocking(read_file, file, DEFAULT_ENCODING, "replace")
        lines = content.split("\n")

    if lines:
        created_at = parse_date_header(lines[0])
        if created_at is not None:
            return created_at

    return _stat_creation_date(stat)


async def _compress_log(
    file: str,
    stat: Optional[os.stat_result],
    compress: Callable[[bytes], bytes],
    extension: str,
) -> str:
    raw = await run_blocking(read_bytes, file)
    # 只解码首行用于推断时间，归档内容保持原始字节
    first_line = raw.split(b"\n", 1)[0].decode(DEFAULT_ENCODING, errors="replace")
    created_at = await get_file_creation_date(file, stat=stat, lines=[first_line])

    dirname, basename = os.path.split(file)
    ext = os.path.splitext(basename)[1]
    new_file = os.path.join(dirname, f"{format_date_file_name(created_at)}{ext}.{extension}")

    data = compress(raw)
    await run_blocking(write_bytes, file, data)
    await run_blocking(rename_file, file, new_file)

    logger.debug(f"Rotated log file: {file} -> {new_file}")
    return new_file


async def gzip_compress_log(file: str, stat: Optional[os.stat_result] = None) -> str:
    """gzip 压缩日志文件并重命名为 ``<date><ext>.gz``

    Returns:
        str: 归档文件路径
    """
    return await _compress_log(file, stat, gzip.compress, "gz")


async def brotli_compress_log(file: str, stat: Optional[os.stat_result] = None) -> str:
    """brotli 压缩日志文件并重命名为 ``<date><ext>.br``

    Returns:
        str: 归档文件路径
    """
    return await _compress_log(file, stat, brotli.compress, "br")


COMPRESSORS = {
    "gzip": gzip_compress_log,
    "brotli": brotli_compress_log,
}
